from treeid.adapters.vision.encoder import read_image
from treeid.orchestrator.contracts import IdentifyOutcome, ImagePayload
from treeid.orchestrator.errors import ImageReadError, failure_message


class VisionAdapter:
    name = "base"

    def __init__(self, status_store):
        self.status = status_store

    def identify(self, payload: ImagePayload) -> IdentifyOutcome:
        """Return IdentifyOutcome for one encoded image. Must not raise."""
        raise NotImplementedError

    def identify_file(self, fileobj, mime_type: str) -> IdentifyOutcome:
        """Encode a file-like object, then identify it."""
        try:
            payload = read_image(fileobj, mime_type)
        except ImageReadError as e:
            self.status.error(f"{self.name}: {e}")
            return IdentifyOutcome.failed(e.kind, failure_message(e))
        return self.identify(payload)
