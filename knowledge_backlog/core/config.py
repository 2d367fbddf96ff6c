from pydantic_settings import BaseSettings
from typing import List, Any
import json
from pathlib import Path


def parse_list(v: Any) -> List[str]:
    """Parse a list setting from a JSON list or a comma-separated string"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [item.strip() for item in v.split(',') if item.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Knowledge Backlog"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3001

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./knowledge.db"
    DB_ECHO: bool = False

    # ==========================================
    # Identity
    # ==========================================
    # Header set by the reverse proxy after it authenticated the caller
    AUTH_HEADER_NAME: str = "X-Auth-User"

    # Seed list for the authorized_users table (only inserted when missing)
    AUTHORIZED_USERS: str = ""

    # Display names allowed to use the admin endpoints
    ADMIN_USERS: str = ""

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return parse_list(self.CORS_ORIGINS_STR)

    @property
    def AUTHORIZED_USERS_LIST(self) -> List[str]:
        return parse_list(self.AUTHORIZED_USERS)

    @property
    def ADMIN_USERS_LIST(self) -> List[str]:
        return [user.lower() for user in parse_list(self.ADMIN_USERS)]

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    # ==========================================
    # Rate limiting / request limits
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 120
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    MAX_REQUEST_SIZE: int = 1024 * 1024  # 1MB

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)

    def is_admin(self, username: str) -> bool:
        return bool(username) and username.lower() in self.ADMIN_USERS_LIST


settings = Settings()
