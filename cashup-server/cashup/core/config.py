"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./cashup.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    ledger_row_limit: int = Field(default=5000, gt=0)
    auto_create: bool = True


class ReconciliationSettings(BaseModel):
    timezone: str = "Africa/Mogadishu"
    default_fx_rate: Decimal = Decimal("36000")
    reference_currency: str = "USD"
    local_currency: str = "SOS"
    credit_tokens: list[str] = Field(default_factory=lambda: ["credit", "deyn"])
    tolerance: Decimal = Field(default=Decimal("0.01"), gt=0)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value

    @field_validator("credit_tokens")
    @classmethod
    def _clean_tokens(cls, value: list[str]) -> list[str]:
        tokens = [token.strip().lower() for token in value if token and token.strip()]
        if not tokens:
            raise ValueError("at least one credit token is required")
        return tokens


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s :: %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Cash-Up Reconciliation Server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    reconciliation: ReconciliationSettings = ReconciliationSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.reconciliation.timezone)

    @property
    def default_fx_rate(self) -> Decimal:
        return self.reconciliation.default_fx_rate


@lru_cache()
def get_settings() -> Settings:
    return Settings()
