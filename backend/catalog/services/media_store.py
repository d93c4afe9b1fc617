"""
Media store for category images.

Uploads are written once by the API layer, which hands the resulting
``StoredMedia`` records to the category service. The service only ever asks
the store to delete assets it no longer references.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from catalog.config import settings
from catalog.exceptions import MediaStoreError

logger = logging.getLogger(__name__)


@dataclass
class StoredMedia:
    """An asset held by the media store, tagged with the upload field it came from."""
    asset_id: str
    url: str
    field_name: str


class MediaStore(ABC):
    """Opaque asset storage: save returns a location, delete removes by id."""

    @abstractmethod
    def save(self, content: bytes, filename: Optional[str], field_name: str) -> StoredMedia:
        ...

    @abstractmethod
    def delete(self, asset_id: str) -> None:
        ...


class LocalMediaStore(MediaStore):
    """Stores assets as files under a root directory served at ``base_url``."""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, asset_id: str) -> Path:
        path = (self.root / asset_id).resolve()
        if self.root.resolve() not in path.parents:
            raise MediaStoreError(f"Invalid asset id: {asset_id}")
        return path

    def save(self, content: bytes, filename: Optional[str], field_name: str) -> StoredMedia:
        ext = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else "bin"
        asset_id = f"categories/{uuid.uuid4().hex}.{ext}"
        path = self._path_for(asset_id)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to store media asset {asset_id}: {e}")
            raise MediaStoreError(f"Failed to store {filename or 'upload'}") from e

        logger.info(f"Stored media asset {asset_id} ({len(content)} bytes)")
        return StoredMedia(
            asset_id=asset_id,
            url=f"{self.base_url}/{asset_id}",
            field_name=field_name
        )

    def delete(self, asset_id: str) -> None:
        path = self._path_for(asset_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete media asset {asset_id}: {e}")
            raise MediaStoreError(f"Failed to delete media asset {asset_id}") from e

        logger.info(f"Deleted media asset {asset_id}")


def get_media_store() -> MediaStore:
    """FastAPI dependency returning the configured media store."""
    return LocalMediaStore(settings.media_root, settings.media_base_url)
