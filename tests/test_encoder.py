import base64
import io
import pytest
from treeid.adapters.vision.encoder import (
    decode_image, encode_image, payload_from_data_url, read_image, to_data_url,
)
from treeid.orchestrator.errors import ImageReadError


@pytest.mark.parametrize("fixture,mime", [("jpeg_bytes", "image/jpeg"), ("png_bytes", "image/png")])
def test_encode_reconstructs_bytes(request, fixture, mime):
    raw = request.getfixturevalue(fixture)
    payload = encode_image(raw, mime)
    assert payload.mime_type == mime
    assert base64.b64decode(payload.data) == raw
    assert "," not in payload.data


def test_read_image_reads_whole_file(png_bytes):
    payload = read_image(io.BytesIO(png_bytes), "image/png")
    assert decode_image(payload) == png_bytes


def test_read_image_failure_propagates():
    class Broken:
        def read(self):
            raise OSError("disk gone")

    with pytest.raises(ImageReadError) as exc:
        read_image(Broken(), "image/jpeg")
    assert exc.value.kind == "read"
    assert "disk gone" in str(exc.value)


def test_data_url_keeps_segment_after_first_comma(jpeg_bytes):
    payload = encode_image(jpeg_bytes, "image/jpeg")
    url = to_data_url(payload)
    assert url.startswith("data:image/jpeg;base64,")

    back = payload_from_data_url(url)
    assert back == payload


def test_data_url_split_only_once():
    payload = payload_from_data_url("data:image/png;base64,AAAA,BBBB")
    assert payload.data == "AAAA,BBBB"
    assert payload.mime_type == "image/png"


def test_bare_base64_uses_default_mime():
    payload = payload_from_data_url("  aGVsbG8=  ", default_mime="image/png")
    assert payload.data == "aGVsbG8="
    assert payload.mime_type == "image/png"


def test_no_type_validation():
    payload = encode_image(b"not an image", "text/plain")
    assert payload.mime_type == "text/plain"


def test_read_image_closed_stream(png_bytes):
    f = io.BytesIO(png_bytes)
    f.close()
    with pytest.raises(ImageReadError) as exc:
        read_image(f, "image/png")
    assert exc.value.kind == "read"


def test_identify_file_closed_stream_is_read_failure(status, png_bytes):
    from treeid.adapters.vision.mock_vision import MockVision
    f = io.BytesIO(png_bytes)
    f.close()
    out = MockVision(status).identify_file(f, "image/png")
    assert not out.ok
    assert out.failure.kind == "read"
    assert out.failure.message


def test_data_url_drops_line_breaks(png_bytes):
    b64 = base64.b64encode(png_bytes).decode()
    wrapped = "\n".join(b64[i:i + 76] for i in range(0, len(b64), 76))
    payload = payload_from_data_url(f"data:image/png;base64,\n{wrapped}\n")
    assert payload.data == b64
    assert decode_image(payload) == png_bytes
