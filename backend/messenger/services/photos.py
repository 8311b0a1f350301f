"""Photo gallery: uploaded images with a description/author sidecar text file."""

from pathlib import Path

from messenger.services.storage.base import BaseCollectionStore
from messenger.services.uploads import StoredFile

PHOTOS = "photos"


class PhotoService:
    def __init__(self, store: BaseCollectionStore, directory: Path):
        self.store = store
        self.directory = directory

    def list(self) -> list[dict]:
        return self.store.read(PHOTOS, [])

    def add(self, photo: StoredFile, description: str, author: str) -> dict:
        text_filename = Path(photo.filename).stem + ".txt"
        (self.directory / text_filename).write_text(
            f"Description: {description}\nAuthor: {author}", encoding="utf-8"
        )

        with self.store.locked(PHOTOS):
            photos = self.store.read(PHOTOS, [])
            record = {
                "id": len(photos) + 1,
                "filename": photo.filename,
                "textFilename": text_filename,
                "description": description,
                "author": author,
                "path": f"/uploads/{photo.filename}",
                "textPath": f"/uploads/{text_filename}",
            }
            photos.append(record)
            self.store.write(PHOTOS, photos)
        return record
