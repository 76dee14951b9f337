from decimal import Decimal

from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator

from utils.pricing import check_tax_rate

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env")

    ENV: str = "development"

    DATABASE_URL: str = "sqlite:///./storefront.db"
    # "memory" or "database"
    STORAGE_BACKEND: str = "database"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    TAX_RATE: Decimal = Decimal("0.07")
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    @field_validator("TAX_RATE")
    @classmethod
    def validate_tax_rate(cls, value: Decimal) -> Decimal:
        return check_tax_rate(value)


settings = Settings()
