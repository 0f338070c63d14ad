import io
import logging
import uuid
from pathlib import Path
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from PIL import Image, UnidentifiedImageError

from .errors import UnsupportedImageError
from .models import ImageAsset

logger = logging.getLogger(__name__)

FALLBACK_MEDIA_TYPE = "image/jpeg"

# everything Pillow raises for files it can't fully decode
_BAD_IMAGE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError)


def detect_media_type(data: bytes, declared: Optional[str] = None) -> str:
    # trust the bytes over the browser: a PNG renamed to .jpg is still a PNG
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            # decode all pixel data so truncated files are caught here
            img.load()
    except _BAD_IMAGE_ERRORS as e:
        raise UnsupportedImageError() from e

    mime = Image.MIME.get(fmt) if fmt else None
    if mime:
        return mime
    if declared and declared.startswith("image/"):
        return declared
    return FALLBACK_MEDIA_TYPE


def _write_upload(data: bytes, upload_dir: Path, suffix: str) -> Path:
    upload_dir.mkdir(parents=True, exist_ok=True)
    path = upload_dir / f"{uuid.uuid4().hex}{suffix}"
    path.write_bytes(data)
    return path


async def store_image(data: bytes, filename: str, declared_type: Optional[str], upload_dir: Path) -> ImageAsset:
    """
    Validate an uploaded image and save it under ``upload_dir``.

    Decoding and the disk write both run in the threadpool. Stored names are
    random so two sessions uploading "photo.jpg" never clobber each other.
    """
    media_type = await run_in_threadpool(detect_media_type, data, declared_type)

    suffix = Path(filename or "").suffix.lower()
    path = await run_in_threadpool(_write_upload, data, upload_dir, suffix)

    logger.info("Stored upload %r as %s (%s, %d bytes)", filename, path.name, media_type, len(data))
    return ImageAsset(path=path, media_type=media_type, filename=filename or path.name)
