import threading
import time
from typing import Optional
from treeid.adapters.vision.encoder import encode_image
from treeid.orchestrator.contracts import (
    Attempt, DisplayName, IdentifyOutcome, SelectedFile, SessionState, TreeData,
)
from treeid.orchestrator import errors


class TreeSession:
    """
    UI state for one identification page.

    idle -> file-selected -> loading -> (result | error) -> idle via reset.
    Selecting a file is allowed from any state and clears result/error.
    A completion that arrives after reset or re-select is dropped.
    """

    def __init__(self, vision, status_store, previews):
        self.vision = vision
        self.status = status_store
        self.previews = previews
        self.file: Optional[SelectedFile] = None
        self.loading = False
        self.result: Optional[TreeData] = None
        self.error: Optional[str] = None
        self._attempt_id = 0
        self._lock = threading.RLock()

    # ── derived view ────────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        if self.loading:
            return "loading"
        if self.result is not None:
            return "result"
        if self.error is not None:
            return "error"
        if self.file is not None:
            return "file-selected"
        return "idle"

    @property
    def can_identify(self) -> bool:
        return self.file is not None and not self.loading

    @property
    def show_reset(self) -> bool:
        return self.file is not None or self.result is not None or self.error is not None

    @property
    def display(self) -> DisplayName:
        if self.loading:
            return "loading"
        if self.error is not None:
            return "error"
        if self.result is not None:
            return "result"
        if self.file is not None:
            return "preview"
        return "prompt"

    # ── transitions ─────────────────────────────────────────────────────────

    def select_file(self, name: str, raw: bytes, mime_type: str) -> SelectedFile:
        with self._lock:
            if self.file is not None:
                self.previews.release(self.file.preview_token)
            token = self.previews.create(raw, mime_type)
            self.file = SelectedFile(name=name, raw=raw, mime_type=mime_type, preview_token=token)
            self.result = None
            self.error = None
            # an attempt still in flight belongs to the previous file
            self.loading = False
            self._attempt_id += 1
            self.status.log(f"session: file selected {name} ({mime_type}, {len(raw)} bytes)")
            return self.file

    def begin_identify(self) -> tuple[Optional[Attempt], Optional[str]]:
        """Move to loading. Returns (attempt, None) or (None, error_code)."""
        with self._lock:
            if self.file is None:
                return None, errors.ERR_NO_FILE
            if self.loading:
                return None, errors.ERR_BUSY
            self._attempt_id += 1
            self.loading = True
            self.result = None
            self.error = None
            payload = encode_image(self.file.raw, self.file.mime_type)
            attempt = Attempt(attempt_id=self._attempt_id, file_name=self.file.name, payload=payload)
            self.status.log(f"session: attempt {attempt.attempt_id} start file={attempt.file_name}")
            return attempt, None

    def finish_identify(self, attempt: Attempt, outcome: IdentifyOutcome) -> bool:
        """Apply a completed attempt. Returns False if the attempt is stale."""
        with self._lock:
            if attempt.attempt_id != self._attempt_id or not self.loading:
                self.status.log(f"session: attempt {attempt.attempt_id} finished after reset, ignored")
                return False
            self.loading = False
            if outcome.ok:
                self.result = outcome.result
                self.status.log(f"session: attempt {attempt.attempt_id} result {outcome.result.common_name}")
            else:
                self.error = outcome.failure.message or errors.MSG_UNEXPECTED
                self.status.log(f"session: attempt {attempt.attempt_id} error kind={outcome.failure.kind}")
            return True

    def identify(self) -> tuple[bool, Optional[str]]:
        """
        Run one full attempt: begin, call the vision adapter, finish.
        Blocks for the duration of the model call. Returns (applied, error_code).
        """
        attempt, code = self.begin_identify()
        if attempt is None:
            self.status.log(f"session: identify rejected ({code})")
            return False, code

        t0 = time.time()
        try:
            outcome = self.vision.identify(attempt.payload)
        except Exception as e:
            # adapters should not raise; keep the session usable if one does
            self.status.error(f"session: adapter raised {type(e).__name__}: {e}")
            outcome = IdentifyOutcome.failed(errors.failure_kind(e), errors.failure_message(e))
        dt = int((time.time() - t0) * 1000)
        self.status.log(f"session: attempt {attempt.attempt_id} done dt={dt}ms ok={outcome.ok}")

        applied = self.finish_identify(attempt, outcome)
        return applied, None if applied else errors.ERR_STALE

    def reset(self):
        with self._lock:
            if self.file is not None:
                self.previews.release(self.file.preview_token)
            self.file = None
            self.result = None
            self.error = None
            self.loading = False
            self._attempt_id += 1
            self.status.log("session: reset")
