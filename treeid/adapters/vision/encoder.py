"""
Image encoder: raw bytes / file objects / data URLs -> ImagePayload.

The payload is what the vision adapters embed in their JSON requests:
standard base64 of the whole file plus the declared MIME type. No size or
type checks happen here; "PNG, JPG up to 10MB" is advisory UI copy only.
"""
import base64
from treeid.orchestrator.contracts import ImagePayload
from treeid.orchestrator.errors import ImageReadError

DEFAULT_MIME = "image/jpeg"


def encode_image(raw: bytes, mime_type: str) -> ImagePayload:
    b64 = base64.standard_b64encode(raw).decode("utf-8")
    return ImagePayload(data=b64, mime_type=mime_type or DEFAULT_MIME)


def read_image(fileobj, mime_type: str) -> ImagePayload:
    """Read the full contents of a file-like object and encode them."""
    try:
        raw = fileobj.read()
    except (OSError, ValueError) as e:
        # ValueError: read on a closed stream
        raise ImageReadError(f"could not read image: {e}") from e
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return encode_image(raw, mime_type)


def decode_image(payload: ImagePayload) -> bytes:
    return base64.b64decode(payload.data)


def to_data_url(payload: ImagePayload) -> str:
    return f"data:{payload.mime_type};base64,{payload.data}"


def payload_from_data_url(text: str, default_mime: str = DEFAULT_MIME) -> ImagePayload:
    """
    Accept either "data:<mime>;base64,<data>" or a bare base64 string.
    Only the segment after the first comma is kept as the payload; line
    breaks and other whitespace inside the base64 are dropped.
    """
    text = text.strip()
    if "," not in text:
        return ImagePayload(data=_compact(text), mime_type=default_mime)
    prefix, data = text.split(",", 1)
    data = _compact(data)
    mime_type = default_mime
    if prefix.startswith("data:"):
        declared = prefix[len("data:"):].split(";", 1)[0].strip()
        if declared:
            mime_type = declared
    return ImagePayload(data=data, mime_type=mime_type)


def _compact(data: str) -> str:
    return "".join(data.split())
