import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from messenger.core.config import settings
from messenger.core.deps import get_store
from messenger.api import chats, photos, portfolio, users, wallpapers
from messenger.services.users import UserDirectory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Configure logging based on debug setting
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s" if settings.debug
        else "%(levelname)-8s %(name)s: %(message)s",
    )

    for directory in (settings.data_dir, settings.uploads_dir, settings.wallpaper_dir):
        directory.mkdir(parents=True, exist_ok=True)

    UserDirectory(get_store()).ensure_default_admins()
    logger.info(f"{settings.app_name} started with {settings.storage_backend} storage")

    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chats.router, prefix="/api", tags=["chats"])
app.include_router(users.router, tags=["users"])
app.include_router(wallpapers.router, tags=["wallpapers"])
app.include_router(portfolio.router, prefix="/api/portfolio", tags=["portfolio"])
app.include_router(photos.router, tags=["photos"])

app.mount("/uploads", StaticFiles(directory=settings.uploads_dir, check_dir=False), name="uploads")
app.mount("/wallpaper", StaticFiles(directory=settings.wallpaper_dir, check_dir=False), name="wallpaper")


@app.get("/")
async def root():
    return {
        "status": "OK",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/health")
async def health():
    return {"status": "ok", "app": settings.app_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
