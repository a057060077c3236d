from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path
import os


def _default_data_dir() -> str:
    # Railway mounts its persistent volume here
    return os.environ.get("RAILWAY_VOLUME_MOUNT_PATH") or "./data"


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Sleep Diary"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # API settings
    API_PREFIX: str = "/api"

    # CORS settings
    BACKEND_CORS_ORIGINS: list[str] = ["*"]

    # Session tokens
    JWT_SECRET: str = "dev-secret-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_DAYS: int = 7

    # Credentials
    BCRYPT_ROUNDS: int = 10
    MIN_PASSWORD_LENGTH: int = 4
    ADMIN_USERNAME: str = "admin"
    # Insecure bootstrap password, rotate it right after first deploy
    ADMIN_DEFAULT_PASSWORD: str = "admin123"

    # Storage: "sqlite" (file-backed) or "memory" (in-memory with JSON snapshots)
    STORAGE_BACKEND: str = "sqlite"
    DATA_DIR: str = _default_data_dir()
    DATABASE_FILE: str = "sleep_diary.db"
    SNAPSHOT_FILE: str = "sleep_diary.json"
    SNAPSHOT_INTERVAL_SECONDS: float = 30.0

    # Single-page client shell
    STATIC_DIR: Optional[str] = "./public"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @property
    def database_path(self) -> Path:
        return Path(self.DATA_DIR) / self.DATABASE_FILE

    @property
    def snapshot_path(self) -> Path:
        return Path(self.DATA_DIR) / self.SNAPSHOT_FILE

    def ensure_data_dir(self) -> Path:
        """Create the data directory if it does not exist yet"""
        path = Path(self.DATA_DIR)
        path.mkdir(parents=True, exist_ok=True)
        return path


settings = Settings()
