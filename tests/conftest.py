import io
import json
import httpx
import pytest
from PIL import Image
from treeid.adapters.vision.gemini_vision import GeminiVision
from treeid.services.status_store import StatusStore

OAK = {
    "commonName": "Oak",
    "scientificName": "Quercus robur",
    "description": "A broad deciduous tree of European woodland.",
    "careTips": ["Water weekly", "Full sun"],
}


def image_bytes(fmt: str = "JPEG") -> bytes:
    img = Image.new("RGB", (64, 48), (120, 180, 120))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def gemini_transport(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def replying(text: str):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=gemini_reply(text))
    return handler


@pytest.fixture
def status():
    return StatusStore()


@pytest.fixture
def jpeg_bytes():
    return image_bytes("JPEG")


@pytest.fixture
def png_bytes():
    return image_bytes("PNG")


@pytest.fixture
def make_gemini(status):
    def _make(handler):
        return GeminiVision(status, api_key="test-key", http_client=gemini_transport(handler))
    return _make


@pytest.fixture
def oak_json():
    return json.dumps(OAK)
