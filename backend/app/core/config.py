from pydantic_settings import BaseSettings
from typing import List, Dict, Any
import json


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
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
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


def parse_default_halls(v: str) -> Dict[str, str]:
    """Parse seeded halls from environment variable format: CODE1:Name One,CODE2:Name Two"""
    if not v:
        return {}
    halls = {}
    for item in v.split(','):
        if ':' in item:
            code, name = item.split(':', 1)
            code = code.strip().upper()
            if code:
                halls[code] = name.strip() or code
    return halls


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Mess Feedback"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes

    # ==========================================
    # Security
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 10  # 4 for tests (fast), 10+ for prod

    # ==========================================
    # Campus
    # ==========================================
    INSTITUTE_EMAIL_DOMAIN: str = "iitkgp.ac.in"
    INSTITUTE_NAME: str = "IIT Kharagpur"
    DEFAULT_HALL_CODE: str = "RK"
    DEFAULT_HALLS_STR: str = "RK:Radhakrishnan Hall"
    APP_TIMEZONE: str = "UTC"  # Defines the calendar day for reviews and stats

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    AUTH_RATE_LIMIT: str = "10/15 minutes"
    COMPLAINT_RATE_LIMIT: str = "10/hour"

    # ==========================================
    # API
    # ==========================================
    RECENT_ACTIVITY_LIMIT: int = 10
    MAX_REQUEST_BYTES: int = 1024 * 1024

    # CORS (stored as comma-separated string, parsed to list)
    CORS_ORIGINS_STR: str = "http://localhost:5000,http://localhost:5173,http://127.0.0.1:5000,http://127.0.0.1:5173"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    @property
    def email_suffix(self) -> str:
        """Required signup email suffix, e.g. '@iitkgp.ac.in'"""
        return f"@{self.INSTITUTE_EMAIL_DOMAIN.lstrip('@').lower()}"

    def get_default_halls(self) -> Dict[str, str]:
        return parse_default_halls(self.DEFAULT_HALLS_STR)

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Create settings instance
settings = Settings()
