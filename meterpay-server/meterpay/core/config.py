"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./meterpay.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    # When disabled, anonymous requests act as the demo user.
    auth_required: bool = False


class StorageSettings(BaseModel):
    backend: Literal["sql", "memory"] = "sql"


class TariffSettings(BaseModel):
    price_per_unit: Decimal = Field(default=Decimal("0.45"), gt=0)
    service_fee: Decimal = Field(default=Decimal("0.50"), ge=0)
    currency: str = "USD"
    units_display_places: int = Field(default=1, ge=0, le=4)


class LimitSettings(BaseModel):
    meter_number_pattern: str = r"^\d{11}$"
    min_amount: Decimal = Decimal("5")
    max_amount: Decimal = Decimal("1000")
    max_topup: Decimal = Decimal("10000")


class PaymentSettings(BaseModel):
    simulate_failures: bool = False
    success_rate: float = Field(default=0.9, ge=0.0, le=1.0)
    seed: Optional[int] = None


class DemoUserSettings(BaseModel):
    username: str = "demo"
    password: str = "demo1234"
    full_name: str = "Demo Customer"
    email: Optional[str] = "demo@meterpay.local"
    initial_balance: Decimal = Decimal("100.00")


class NotificationSettings(BaseModel):
    timezone: str = "UTC"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


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
    project_name: str = "MeterPay Server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    storage: StorageSettings = StorageSettings()
    tariff: TariffSettings = TariffSettings()
    limits: LimitSettings = LimitSettings()
    payments: PaymentSettings = PaymentSettings()
    demo_user: DemoUserSettings = DemoUserSettings()
    notifications: NotificationSettings = NotificationSettings()
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
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def uses_memory_storage(self) -> bool:
        return self.storage.backend == "memory"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
