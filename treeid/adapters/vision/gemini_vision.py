"""
Gemini Vision tree identifier.

Sends the encoded photo plus a fixed instruction to Gemini's REST
generateContent endpoint and asks for JSON constrained to RESPONSE_SCHEMA.
Uses httpx directly, the same way the other hosted-model adapters do, so
no vendor SDK is needed.

The client is constructed explicitly with its credential; nothing is read
from the environment here (see treeid.services.config).
"""
import httpx
from treeid.adapters.vision.base import VisionAdapter
from treeid.adapters.vision.schema import PROMPT, RESPONSE_SCHEMA, parse_tree_data
from treeid.orchestrator.contracts import IdentifyOutcome, ImagePayload
from treeid.orchestrator.errors import TransportError, failure_kind, failure_message

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL = "gemini-2.5-flash"


class GeminiVision(VisionAdapter):
    name = "gemini_vision"

    def __init__(
        self,
        status_store,
        api_key: str,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ):
        super().__init__(status_store)
        if not api_key:
            raise ValueError("GeminiVision requires an API key")
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client or httpx.Client(timeout=timeout)
        self.status.log(f"gemini_vision: ready (model={model})")

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_request(self, payload: ImagePayload) -> dict:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {
                            "inline_data": {
                                "mime_type": payload.mime_type,
                                "data": payload.data,
                            }
                        },
                        {"text": PROMPT},
                    ],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def identify(self, payload: ImagePayload) -> IdentifyOutcome:
        try:
            text = self._generate(payload)
            self.status.log(f"gemini_vision: raw response = {text[:120]!r}")
            result = parse_tree_data(text)
        except Exception as e:
            self.status.error(f"gemini_vision: error identifying tree: {type(e).__name__}: {e}")
            return IdentifyOutcome.failed(failure_kind(e), failure_message(e))

        self.status.log(f"gemini_vision: → {result.common_name} ({result.scientific_name})")
        return IdentifyOutcome.success(result)

    def _generate(self, payload: ImagePayload) -> str:
        headers = {
            "x-goog-api-key": self._api_key,
            "Content-Type": "application/json",
        }
        self.status.log(f"gemini_vision: POST {self.model}:generateContent ({payload.mime_type})")
        try:
            resp = self._http.post(self.url, json=self.build_request(payload), headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise TransportError(str(e)) from e

        if not resp.is_success:
            raise TransportError(f"HTTP {resp.status_code}: {_error_detail(resp)}")

        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError("endpoint returned a non-JSON body") from e
        return _response_text(body)

    def close(self):
        self._http.close()


def _error_detail(resp: httpx.Response) -> str:
    try:
        err = resp.json().get("error", {})
        if isinstance(err, dict) and err.get("message"):
            return err["message"]
    except ValueError:
        pass
    return resp.text[:300]


def _response_text(body: dict) -> str:
    candidates = body.get("candidates") or []
    if not candidates:
        feedback = body.get("promptFeedback", {}).get("blockReason")
        raise TransportError(f"no candidates returned (blockReason={feedback})" if feedback else "no candidates returned")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts)
    return text.strip()
