# Error codes returned by the session endpoints
ERR_BUSY = "BUSY"              # identification already in flight
ERR_NO_FILE = "NO_FILE"        # nothing selected yet
ERR_STALE = "STALE"            # session was reset while the call was running

# User-facing messages, kept identical across adapters
MSG_TEMPLATE = "Failed to identify the tree. The model responded with an error: {detail}"
MSG_FALLBACK = "An unknown error occurred while identifying the tree. Please try again."
MSG_UNEXPECTED = "An unexpected error occurred."


class IdentifyError(Exception):
    """Base class for failures raised inside an identification attempt."""
    kind = "unknown"


class ImageReadError(IdentifyError):
    kind = "read"


class TransportError(IdentifyError):
    kind = "transport"


class ResponseParseError(IdentifyError):
    kind = "parse"


class ResponseValidationError(IdentifyError):
    kind = "validation"


def failure_message(exc: BaseException) -> str:
    detail = str(exc).strip()
    if detail:
        return MSG_TEMPLATE.format(detail=detail)
    return MSG_FALLBACK


def failure_kind(exc: BaseException) -> str:
    return getattr(exc, "kind", "unknown")
