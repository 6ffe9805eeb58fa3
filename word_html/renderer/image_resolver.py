"""Resolve picture references to inline base64 ``<img>`` markup."""
from __future__ import annotations

import base64
import html
from pathlib import PurePosixPath
from typing import Mapping, Optional

from word_html.model.elements import DrawingReference, MediaAsset
from word_html.parser.rels_parser import RelationshipMap
from word_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

IMAGE_SUBTYPES = {
    ".png": "png",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".jpe": "jpeg",
    ".gif": "gif",
    ".bmp": "bmp",
    ".tif": "tiff",
    ".tiff": "tiff",
    ".svg": "svg+xml",
    ".emf": "x-emf",
    ".wmf": "x-wmf",
    ".webp": "webp",
}


class ImageResolver:
    """Maps relationship identifiers to embedded media and renders them.

    Any broken link in the chain (unknown id, external target, missing media
    entry) yields no markup for that reference.
    """

    def __init__(
        self,
        relationships: RelationshipMap,
        media: Mapping[str, bytes],
        default_subtype: str = "png",
    ) -> None:
        self._relationships = relationships
        self._media = media
        self._default_subtype = default_subtype

    def resolve(self, r_id: str) -> Optional[MediaAsset]:
        """Return the media asset a relationship id points at, if any."""
        target_path = self._relationships.resolve_part(r_id)
        if target_path is None:
            LOGGER.debug("Unresolved image relationship %s", r_id)
            return None
        data = self._media.get(target_path)
        if data is None:
            LOGGER.debug("Relationship %s points at missing media entry %s", r_id, target_path)
            return None
        return MediaAsset(
            target_path=target_path,
            media_type=self.media_type(target_path),
            binary_data=data,
        )

    def render(self, drawing: DrawingReference) -> str:
        asset = self.resolve(drawing.r_id)
        if asset is None:
            return ""
        encoded = base64.b64encode(asset.binary_data).decode("ascii")
        alt = html.escape(drawing.description or "", quote=True)
        return f'<img src="data:{asset.media_type};base64,{encoded}" alt="{alt}" />'

    def media_type(self, target_path: str) -> str:
        """Determine the image MIME type from the file extension."""
        ext = PurePosixPath(target_path).suffix.lower()
        return f"image/{IMAGE_SUBTYPES.get(ext, self._default_subtype)}"
