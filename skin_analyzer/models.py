from dataclasses import dataclass
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageAsset:
    # the user's file as stored on local disk, plus what kind of image it is
    path: Path
    media_type: str
    filename: str = ""

    def discard(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove stored upload %s: %s", self.path, e)


@dataclass(frozen=True)
class EncodedPayload:
    # base64 text, standard alphabet, no newlines, no "data:...;base64," prefix
    data: str
    media_type: str
