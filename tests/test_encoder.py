import asyncio
import base64

import pytest

from skin_analyzer.encoder import decode_payload, encode_bytes, encode_image
from skin_analyzer.errors import ReadError
from skin_analyzer.models import EncodedPayload, ImageAsset


def test_encode_image_round_trip(png_asset, png_bytes):
    payload = asyncio.run(encode_image(png_asset))

    assert payload.media_type == "image/png"
    assert decode_payload(payload) == png_bytes


def test_encoded_text_is_plain_base64():
    data = bytes(range(256)) * 40
    text = encode_bytes(data)

    assert "\n" not in text
    assert not text.startswith("data:")
    assert base64.b64decode(text) == data


def test_empty_file_encodes_to_empty_text(tmp_path):
    path = tmp_path / "empty.jpg"
    path.write_bytes(b"")

    payload = asyncio.run(encode_image(ImageAsset(path=path, media_type="image/jpeg")))
    assert payload.data == ""


def test_missing_file_raises_read_error(tmp_path):
    asset = ImageAsset(path=tmp_path / "gone.png", media_type="image/png")

    with pytest.raises(ReadError):
        asyncio.run(encode_image(asset))


def test_directory_instead_of_file_raises_read_error(tmp_path):
    asset = ImageAsset(path=tmp_path, media_type="image/png")

    with pytest.raises(ReadError):
        asyncio.run(encode_image(asset))


def test_decode_rejects_garbage():
    with pytest.raises(ValueError):
        decode_payload(EncodedPayload(data="not base64!!", media_type="image/png"))
