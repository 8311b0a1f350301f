"""Shared wallpaper: the current pointer plus the files in the wallpaper directory."""

import logging
from pathlib import Path
from typing import Optional

from messenger.core.sandbox import resolve_sandboxed_path
from messenger.services.storage.base import BaseCollectionStore

logger = logging.getLogger(__name__)

WALLPAPER = "wallpaper"
URL_PREFIX = "/wallpaper/"
VIDEO_EXTENSIONS = {".mp4", ".avi", ".mov", ".wmv"}


class WallpaperNotFound(Exception):
    pass


class WallpaperService:
    def __init__(self, store: BaseCollectionStore, directory: Path):
        self.store = store
        self.directory = directory

    def current(self) -> dict:
        return self.store.read(WALLPAPER, {"path": None, "type": None})

    def set_current(self, path: Optional[str], content_type: Optional[str] = None) -> dict:
        pointer = {"path": path, "type": content_type}
        with self.store.locked(WALLPAPER):
            self.store.write(WALLPAPER, pointer)
        return pointer

    def list_files(self) -> list[dict]:
        if not self.directory.exists():
            return []
        wallpapers = []
        for item in sorted(self.directory.iterdir()):
            if not item.is_file():
                continue
            wallpapers.append({
                "name": item.name,
                "path": URL_PREFIX + item.name,
                "type": "video" if item.suffix.lower() in VIDEO_EXTENSIONS else "image",
            })
        return wallpapers

    def delete(self, path: str) -> None:
        """Delete a wallpaper file, clearing the pointer if it was the current one.

        Raises SandboxError for paths outside the wallpaper directory.
        """
        filename = path.replace(URL_PREFIX, "", 1)
        target = resolve_sandboxed_path(self.directory, filename)
        if not target.is_file():
            logger.debug(f"Wallpaper {path} not found")
            raise WallpaperNotFound(path)

        target.unlink()
        with self.store.locked(WALLPAPER):
            if self.current().get("path") == path:
                self.set_current(None, None)
        logger.info(f"Deleted wallpaper {path}")
