import secrets
from typing import Dict, Optional

from .models import ImageAsset

PREVIEW_PREFIX = "/preview/"


class PreviewRegistry:
    # short-lived urls pointing at a session's selected image
    # every create() must be paired with a revoke() or the entry lingers

    def __init__(self):
        self._items: Dict[str, ImageAsset] = {}

    def create(self, asset: ImageAsset) -> str:
        token = secrets.token_urlsafe(16)
        self._items[token] = asset
        return PREVIEW_PREFIX + token

    def revoke(self, url: Optional[str]) -> None:
        if url and url.startswith(PREVIEW_PREFIX):
            self._items.pop(url[len(PREVIEW_PREFIX):], None)

    def resolve(self, token: str) -> Optional[ImageAsset]:
        return self._items.get(token)

    def __len__(self) -> int:
        return len(self._items)
