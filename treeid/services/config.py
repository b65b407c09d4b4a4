import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv
from treeid.adapters.vision.gemini_vision import GEMINI_BASE_URL, GEMINI_MODEL

ENV_FILE = "treeid/.env"


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    model: str = GEMINI_MODEL
    base_url: str = GEMINI_BASE_URL
    timeout: float = 30.0
    vision_adapter: str = "gemini"     # gemini | mock

    @classmethod
    def from_env(cls, env_file: Optional[str] = ENV_FILE) -> "Settings":
        if env_file:
            load_dotenv(dotenv_path=env_file, override=False)
        return cls(
            api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None,
            model=os.getenv("GEMINI_MODEL", GEMINI_MODEL),
            base_url=os.getenv("GEMINI_BASE_URL", GEMINI_BASE_URL),
            timeout=float(os.getenv("GEMINI_TIMEOUT", "30")),
            vision_adapter=os.getenv("VISION_ADAPTER", "gemini").lower(),
        )


def build_vision(settings: Settings, status, http_client=None):
    """Pick the vision adapter; Gemini falls back to mock without a key."""
    if settings.vision_adapter == "gemini":
        if settings.api_key:
            from treeid.adapters.vision.gemini_vision import GeminiVision
            return GeminiVision(
                status,
                api_key=settings.api_key,
                model=settings.model,
                base_url=settings.base_url,
                timeout=settings.timeout,
                http_client=http_client,
            )
        status.log("vision: GEMINI_API_KEY not set, falling back to mock")
    elif settings.vision_adapter != "mock":
        status.log(f"vision: unknown adapter '{settings.vision_adapter}', using mock")

    from treeid.adapters.vision.mock_vision import MockVision
    return MockVision(status)
