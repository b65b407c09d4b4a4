import base64
import binascii
from typing import Optional
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response
from treeid.adapters.vision.encoder import DEFAULT_MIME, payload_from_data_url
from treeid.orchestrator.contracts import IdentifyOutcome, TreeData
from treeid.orchestrator.state_machine import TreeSession
from treeid.services.config import Settings, build_vision
from treeid.services.models import (
    CaptureFrameRequest, HealthResponse, IdentifyImageResponse, IdentifyResponse,
    SelectResponse, SessionView, TreeOut,
)
from treeid.services.preview_store import PreviewStore, preview_url
from treeid.services.status_store import StatusStore


def tree_out(data: Optional[TreeData]) -> Optional[TreeOut]:
    if data is None:
        return None
    return TreeOut(
        commonName=data.common_name,
        scientificName=data.scientific_name,
        description=data.description,
        careTips=list(data.care_tips),
    )


def session_view(session: TreeSession, status: StatusStore) -> SessionView:
    f = session.file
    return SessionView(
        state=session.state,
        display=session.display,
        can_identify=session.can_identify,
        show_reset=session.show_reset,
        loading=session.loading,
        file_name=f.name if f else None,
        preview_url=preview_url(f.preview_token) if f else None,
        result=tree_out(session.result),
        error=session.error,
        logs=status.tail(50),
    )


def outcome_response(outcome: IdentifyOutcome) -> IdentifyImageResponse:
    if outcome.ok:
        return IdentifyImageResponse(ok=True, result=tree_out(outcome.result))
    return IdentifyImageResponse(ok=False, error_kind=outcome.failure.kind, error=outcome.failure.message)


def create_app(settings: Optional[Settings] = None, vision=None, http_client=None) -> FastAPI:
    settings = settings or Settings.from_env()
    status = StatusStore()
    vision = vision or build_vision(settings, status, http_client=http_client)
    previews = PreviewStore(status)
    session = TreeSession(vision=vision, status_store=status, previews=previews)
    status.log(f"vision adapter: {type(vision).__name__}")

    app = FastAPI(title="treeid api")
    app.state.settings = settings
    app.state.status = status
    app.state.vision = vision
    app.state.previews = previews
    app.state.session = session

    @app.get("/status", response_model=SessionView)
    def get_status():
        return session_view(session, status)

    @app.post("/select", response_model=SelectResponse)
    async def select(file: UploadFile = File(...)):
        try:
            raw = await file.read()
        except OSError as e:
            status.error(f"SELECT read error: {e}")
            return SelectResponse(ok=False, error="could not read upload", view=session_view(session, status))
        name = file.filename or "upload"
        session.select_file(name, raw, file.content_type or DEFAULT_MIME)
        return SelectResponse(ok=True, view=session_view(session, status))

    @app.post("/identify", response_model=IdentifyResponse)
    def identify():
        applied, code = session.identify()
        return IdentifyResponse(ok=applied, error_code=code, view=session_view(session, status))

    @app.post("/reset", response_model=SessionView)
    def reset():
        session.reset()
        return session_view(session, status)

    @app.get("/preview/{token}")
    def preview(token: str):
        item = previews.get(token)
        if item is None:
            raise HTTPException(status_code=404, detail="preview released")
        raw, mime_type = item
        return Response(content=raw, media_type=mime_type)

    @app.post("/identify_image", response_model=IdentifyImageResponse)
    def identify_image(file: UploadFile = File(...)):
        """Stateless identification of one uploaded image; the page session is untouched."""
        status.log(f"IDENTIFY_IMAGE received {file.filename}")
        outcome = vision.identify_file(file.file, file.content_type or DEFAULT_MIME)
        return outcome_response(outcome)

    @app.post("/capture_frame", response_model=IdentifyImageResponse)
    def capture_frame(req: CaptureFrameRequest):
        payload = payload_from_data_url(req.image, default_mime=req.mime_type or DEFAULT_MIME)
        if not payload.data:
            status.log("CAPTURE_FRAME empty image")
            return IdentifyImageResponse(ok=False, error_kind="read", error="empty image")
        try:
            base64.b64decode(payload.data, validate=True)
        except (binascii.Error, ValueError) as e:
            status.log(f"CAPTURE_FRAME decode error: {e}")
            return IdentifyImageResponse(ok=False, error_kind="read", error="base64 decode failed")

        status.log(f"CAPTURE_FRAME received ({payload.mime_type})")
        return outcome_response(vision.identify(payload))

    @app.get("/health", response_model=HealthResponse)
    def health():
        configured = bool(settings.api_key)
        return HealthResponse(
            api=True,
            vision_adapter=type(vision).__name__,
            model=getattr(vision, "model", None),
            credential_configured=configured,
            all_ok=configured or settings.vision_adapter == "mock",
        )

    return app


app = create_app()
