from pathlib import Path

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "Messenger"
    debug: bool = False

    # Paths
    data_dir: Path = _BACKEND_DIR / "data"
    uploads_dir: Path = _BACKEND_DIR / "uploads"
    wallpaper_dir: Path = _BACKEND_DIR / "wallpaper"
    db_path: Path = _BACKEND_DIR / "messenger.db"

    # Storage
    storage_backend: str = "json"  # json | memory | sqlite

    # Uploads
    default_avatar: str = "default-avatar.png"
    chat_upload_max_bytes: int = 10 * 1024 * 1024
    photo_upload_max_bytes: int = 5 * 1024 * 1024
    upload_max_bytes: int = 50 * 1024 * 1024

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    model_config = {
        "env_file": str(_BACKEND_DIR / ".env"),
        "env_prefix": "MESSENGER_",
    }


settings = Settings()
