import base64
import binascii
import logging

from fastapi.concurrency import run_in_threadpool

from .errors import ReadError
from .models import EncodedPayload, ImageAsset

logger = logging.getLogger(__name__)


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_payload(payload: EncodedPayload) -> bytes:
    try:
        return base64.b64decode(payload.data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"payload is not valid base64: {e}") from e


async def encode_image(asset: ImageAsset) -> EncodedPayload:
    """
    Read the whole file behind ``asset`` and return it base64 encoded.

    The read runs in the threadpool so the event loop is free while the
    file comes off disk; callers just await the finished payload.
    """
    try:
        data = await run_in_threadpool(asset.path.read_bytes)
    except OSError as e:
        # removed file, permissions, a directory where a file should be...
        logger.error("Failed to read %s: %s", asset.path, e)
        raise ReadError(f"Could not read the selected image file: {e}") from e

    logger.debug("Encoded %s (%d bytes, %s)", asset.path.name, len(data), asset.media_type)
    return EncodedPayload(data=encode_bytes(data), media_type=asset.media_type)
