import logging
from typing import Any, Optional, Protocol

# using Gemini for the actual skin analysis (API key in .env)
import google.generativeai as genai

from .config import DEFAULT_MODEL
from .errors import (
    ConfigurationError,
    EmptyResponseError,
    InvalidCredentialError,
    QuotaExceededError,
    ServiceRequestError,
)
from .models import EncodedPayload
from .prompts import build_analysis_request

logger = logging.getLogger(__name__)

# substrings the Gemini API puts in its error messages
INVALID_KEY_MARKERS = ("API_KEY_INVALID", "API key not valid")
QUOTA_MARKERS = ("Quota exceeded",)


class ContentModel(Protocol):
    async def generate_content_async(self, contents: Any) -> Any: ...


def _response_text(resp: Any) -> str:
    # resp.text raises ValueError when the candidate has no text parts (blocked, empty...)
    try:
        text = resp.text
    except ValueError:
        return ""
    return text or ""


def classify_failure(exc: Exception):
    message = str(exc)
    if any(m in message for m in INVALID_KEY_MARKERS):
        return InvalidCredentialError()
    if any(m in message for m in QUOTA_MARKERS):
        return QuotaExceededError()
    return ServiceRequestError(message)


class GeminiSkinAnalyzer:
    """
    Sends one photo + the fixed Arabic prompt to Gemini and returns the text.

    ``model`` can be anything with an async ``generate_content_async``; when
    omitted a ``genai.GenerativeModel`` is built from ``model_name`` as long as
    an API key is present. No retries, no timeout of our own: whatever the
    SDK call does is what the caller gets.
    """

    def __init__(self, api_key: Optional[str], model_name: str = DEFAULT_MODEL, model: Optional[ContentModel] = None):
        self.api_key = api_key
        self.model_name = model_name
        self._model = model
        if self._model is None and api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(model_name=model_name)

    @property
    def configured(self) -> bool:
        return bool(self.api_key) and self._model is not None

    async def submit(self, payload: EncodedPayload) -> str:
        # hard stop before touching the network
        if not self.configured:
            raise ConfigurationError()

        request = build_analysis_request(payload)
        logger.info("Sending %s image to %s", payload.media_type, self.model_name)

        try:
            resp = await self._model.generate_content_async(request.contents())
        except Exception as e:
            logger.error("Error calling Gemini API: %s", e)
            raise classify_failure(e) from e

        text = _response_text(resp)
        if not text.strip():
            logger.warning("Gemini returned an empty response")
            raise EmptyResponseError()
        return text
