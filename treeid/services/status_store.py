import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque

logger = logging.getLogger("treeid")

MAX_LOGS = 200

@dataclass
class StatusStore:
    # deque.append is atomic, so handlers on the thread pool can log concurrently
    logs: Deque[str] = field(default_factory=lambda: deque(maxlen=MAX_LOGS))

    def log(self, msg: str):
        logger.info(msg)
        self.logs.append(msg)

    def error(self, msg: str):
        # diagnostic console entry for failed attempts
        logger.error(msg)
        self.logs.append(f"ERROR {msg}")

    def tail(self, n: int) -> list[str]:
        return list(self.logs)[-n:]
