from dataclasses import dataclass, field
from typing import Optional, Literal, List

SessionState = Literal["idle", "file-selected", "loading", "result", "error"]
DisplayName = Literal["prompt", "preview", "loading", "error", "result"]
FailureKind = Literal["read", "transport", "parse", "validation", "unknown"]

@dataclass(frozen=True)
class ImagePayload:
    data: str                  # base64, no data-URL prefix
    mime_type: str             # e.g. "image/jpeg" | "image/png"

@dataclass(frozen=True)
class TreeData:
    common_name: str
    scientific_name: str
    description: str
    care_tips: tuple = ()

@dataclass(frozen=True)
class IdentifyFailure:
    kind: FailureKind
    message: str

@dataclass(frozen=True)
class IdentifyOutcome:
    result: Optional[TreeData] = None
    failure: Optional[IdentifyFailure] = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: TreeData) -> "IdentifyOutcome":
        return cls(result=result)

    @classmethod
    def failed(cls, kind: FailureKind, message: str) -> "IdentifyOutcome":
        return cls(failure=IdentifyFailure(kind=kind, message=message))

@dataclass
class SelectedFile:
    name: str
    raw: bytes = field(repr=False)
    mime_type: str
    preview_token: Optional[str] = None

@dataclass(frozen=True)
class Attempt:
    attempt_id: int
    file_name: str
    payload: ImagePayload = field(repr=False)
