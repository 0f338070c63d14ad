import asyncio
import io
import os
from typing import Any, List, Optional

import pytest
from PIL import Image

from skin_analyzer.gemini_client import GeminiSkinAnalyzer
from skin_analyzer.models import ImageAsset
from skin_analyzer.previews import PreviewRegistry
from skin_analyzer.session import SkinAnalysisSession

SAMPLE_PLAN = "التشخيص: ...\n\nخطة العلاج: ..."


class FakeResponse:
    def __init__(self, text: Optional[str]):
        self._text = text

    @property
    def text(self):
        if self._text is None:
            # what the SDK does when the candidate has no parts
            raise ValueError("The `response.text` quick accessor only works when the response contains a valid `Part`")
        return self._text


class FakeModel:
    # stands in for genai.GenerativeModel; counts calls instead of hitting the network
    def __init__(self, text: Optional[str] = SAMPLE_PLAN, error: Optional[Exception] = None, gate: Optional[asyncio.Event] = None):
        self.text = text
        self.error = error
        self.gate = gate
        self.calls: List[Any] = []

    async def generate_content_async(self, contents):
        self.calls.append(contents)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return FakeResponse(self.text)


def make_png(size_bytes: int = 2048) -> bytes:
    # noisy pixels so the PNG doesn't compress down to nothing
    side = 8
    while True:
        img = Image.frombytes("RGB", (side, side), os.urandom(side * side * 3))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        if buf.tell() >= size_bytes:
            return buf.getvalue()
        side += 4


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def png_asset(tmp_path, png_bytes) -> ImageAsset:
    path = tmp_path / "skin.png"
    path.write_bytes(png_bytes)
    return ImageAsset(path=path, media_type="image/png", filename="skin.png")


@pytest.fixture
def make_asset(tmp_path, png_bytes):
    counter = iter(range(1000))

    def _make(name: Optional[str] = None) -> ImageAsset:
        name = name or f"skin_{next(counter)}.png"
        path = tmp_path / name
        path.write_bytes(png_bytes)
        return ImageAsset(path=path, media_type="image/png", filename=name)

    return _make


@pytest.fixture
def fake_model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def analyzer(fake_model) -> GeminiSkinAnalyzer:
    return GeminiSkinAnalyzer(api_key="test-key", model=fake_model)


@pytest.fixture
def previews() -> PreviewRegistry:
    return PreviewRegistry()


@pytest.fixture
def session(analyzer, previews) -> SkinAnalysisSession:
    return SkinAnalysisSession(analyzer=analyzer, previews=previews)
