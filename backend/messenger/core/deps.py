"""FastAPI dependencies wiring services to the process-wide collection store."""

from fastapi import Depends

from messenger.core.config import settings
from messenger.services.chat.directory import ChatDirectory
from messenger.services.chat.messages import MessageStore
from messenger.services.chat.summaries import ChatSummaryProjector
from messenger.services.photos import PhotoService
from messenger.services.portfolios import PortfolioService
from messenger.services.storage import get_collection_store
from messenger.services.storage.base import BaseCollectionStore
from messenger.services.users import UserDirectory
from messenger.services.wallpapers import WallpaperService

_store: BaseCollectionStore | None = None


def get_store() -> BaseCollectionStore:
    global _store
    if _store is None:
        _store = get_collection_store()
    return _store


def get_message_store(store: BaseCollectionStore = Depends(get_store)) -> MessageStore:
    return MessageStore(store)


def get_chat_directory(store: BaseCollectionStore = Depends(get_store)) -> ChatDirectory:
    return ChatDirectory(store)


def get_user_directory(store: BaseCollectionStore = Depends(get_store)) -> UserDirectory:
    return UserDirectory(store)


def get_summary_projector(
    directory: ChatDirectory = Depends(get_chat_directory),
    messages: MessageStore = Depends(get_message_store),
    users: UserDirectory = Depends(get_user_directory),
) -> ChatSummaryProjector:
    return ChatSummaryProjector(directory, messages, users)


def get_wallpaper_service(store: BaseCollectionStore = Depends(get_store)) -> WallpaperService:
    return WallpaperService(store, settings.wallpaper_dir)


def get_portfolio_service(store: BaseCollectionStore = Depends(get_store)) -> PortfolioService:
    return PortfolioService(store)


def get_photo_service(store: BaseCollectionStore = Depends(get_store)) -> PhotoService:
    return PhotoService(store, settings.uploads_dir)
