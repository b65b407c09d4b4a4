from pydantic import BaseModel
from typing import Optional
from treeid.orchestrator.contracts import DisplayName, SessionState

class TreeOut(BaseModel):
    commonName: str
    scientificName: str
    description: str
    careTips: list[str] = []

class SessionView(BaseModel):
    state: SessionState
    display: DisplayName
    can_identify: bool
    show_reset: bool
    loading: bool
    file_name: Optional[str] = None
    preview_url: Optional[str] = None
    result: Optional[TreeOut] = None
    error: Optional[str] = None
    logs: list[str] = []

class IdentifyResponse(BaseModel):
    ok: bool
    error_code: Optional[str] = None
    view: SessionView

class SelectResponse(BaseModel):
    ok: bool
    error: Optional[str] = None
    view: SessionView

class CaptureFrameRequest(BaseModel):
    image: str                       # base64 or data URL
    mime_type: Optional[str] = None  # used when image is bare base64

class IdentifyImageResponse(BaseModel):
    ok: bool
    result: Optional[TreeOut] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None

class HealthResponse(BaseModel):
    api: bool
    vision_adapter: str
    model: Optional[str] = None
    credential_configured: bool
    all_ok: bool
