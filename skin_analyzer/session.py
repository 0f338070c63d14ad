"""
Per-browser state for the analyzer page.

One ``SkinAnalysisSession`` owns the selected image, its preview url and the
state of the (at most one) analysis request. All transitions go through its
methods; the HTTP layer only reads ``state``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from .encoder import encode_image
from .errors import NoImageSelectedError, SkinAnalyzerError, SubmissionInProgressError
from .gemini_client import GeminiSkinAnalyzer
from .models import EncodedPayload, ImageAsset
from .previews import PreviewRegistry

logger = logging.getLogger(__name__)

CONFIG_HINT = "Ensure your API key is correctly configured if issues persist."


class OperationStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationState:
    status: OperationStatus = OperationStatus.IDLE
    result: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def idle(cls) -> "OperationState":
        return cls()

    @classmethod
    def submitting(cls) -> "OperationState":
        return cls(OperationStatus.SUBMITTING)

    @classmethod
    def succeeded(cls, result: str) -> "OperationState":
        return cls(OperationStatus.SUCCEEDED, result=result)

    @classmethod
    def failed(cls, error: str) -> "OperationState":
        return cls(OperationStatus.FAILED, error=error)


def failure_message(exc: Exception) -> str:
    message = str(exc).rstrip(".")
    if message:
        return f"Failed to analyze image: {message}. {CONFIG_HINT}"
    return f"An unknown error occurred during analysis. {CONFIG_HINT}"


class SkinAnalysisSession:
    def __init__(
        self,
        analyzer: GeminiSkinAnalyzer,
        previews: PreviewRegistry,
        encoder: Callable[[ImageAsset], Awaitable[EncodedPayload]] = encode_image,
    ):
        self.analyzer = analyzer
        self.previews = previews
        self.encoder = encoder
        self.image: Optional[ImageAsset] = None
        self.preview_url: Optional[str] = None
        self.state = OperationState.idle()

    @property
    def is_submitting(self) -> bool:
        return self.state.status is OperationStatus.SUBMITTING

    def select_file(self, asset: ImageAsset) -> None:
        # old preview goes first, then the old file, then the new reference
        self.previews.revoke(self.preview_url)
        self.preview_url = None
        if self.image is not None and self.image != asset:
            self.image.discard()

        self.image = asset
        self.preview_url = self.previews.create(asset)
        # an in-flight request keeps running; its outcome is dropped in submit()
        if not self.is_submitting:
            self.state = OperationState.idle()
        logger.debug("Selected %s (%s)", asset.filename, asset.media_type)

    async def submit(self) -> OperationState:
        if self.image is None:
            raise NoImageSelectedError()
        if self.is_submitting:
            raise SubmissionInProgressError()

        asset = self.image
        self.state = OperationState.submitting()

        try:
            payload = await self.encoder(asset)
            result = await self.analyzer.submit(payload)
        except SkinAnalyzerError as e:
            logger.warning("Analysis failed for %s: %s", asset.filename, e)
            outcome = OperationState.failed(failure_message(e))
        except Exception as e:
            logger.exception("Unexpected error while analyzing %s", asset.filename)
            outcome = OperationState.failed(failure_message(e))
        else:
            outcome = OperationState.succeeded(result)

        if self.image is not asset:
            # user picked another photo meanwhile, this answer is about the old one
            logger.info("Dropping stale analysis for %s", asset.filename)
            outcome = OperationState.idle()

        self.state = outcome
        return self.state

    def reset(self) -> None:
        self.previews.revoke(self.preview_url)
        self.preview_url = None
        if self.image is not None:
            self.image.discard()
        self.image = None
        if not self.is_submitting:
            self.state = OperationState.idle()
