from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    storage_backend: Literal["json", "sql"] = Field(
        default="json", alias="STORAGE_BACKEND"
    )
    products_file: str = Field(default="data/products.json", alias="PRODUCTS_FILE")
    sales_file: str = Field(default="data/sales.json", alias="SALES_FILE")
    database_url: str = Field(default="sqlite:///data/store.db", alias="DATABASE_URL")

    # Presentation
    currency_label: str = Field(default="тг.", alias="CURRENCY_LABEL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Frontend URL allowed by CORS
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    @field_validator("frontend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("storage_backend", "log_level", mode="before")
    @classmethod
    def normalize_case(cls, v: str, info) -> str:
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "log_level" else v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
