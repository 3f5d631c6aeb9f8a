# futurehire/core/config.py
from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    # comma separated list of CORS origins, "*" allows any
    ALLOWED_HOSTS: str = "*"

    # Token signing. There is deliberately no default: the token service
    # refuses to start without an explicit secret.
    SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    # None or 0 issues tokens without an expiry claim
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = 60 * 24

    # PBKDF2-SHA256 work factor
    PASSWORD_HASH_ROUNDS: int = 100_000

    # Credential store: 'mongo' or 'memory'
    STORE_BACKEND: str = "mongo"

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017/futurehire"
    MONGODB_DB: str = "futurehire"
    MONGODB_USERS_COLLECTION: str = "users"

    # Resume analysis upload
    RESUME_ALLOWED_EXTENSIONS: str = ".pdf,.docx,.txt"

    # Pydantic v2 settings: read from .env file
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @property
    def cors_origins(self) -> List[str]:
        return [h.strip() for h in self.ALLOWED_HOSTS.split(",") if h.strip()]

    @property
    def resume_extensions(self) -> tuple:
        return tuple(e.strip().lower() for e in self.RESUME_ALLOWED_EXTENSIONS.split(",") if e.strip())

# single shared settings instance
settings = Settings()
