"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """Market-data cache connection and key layout."""

    model_config = SettingsConfigDict(env_prefix="REDIS_")

    url: str = "redis://localhost:6379/0"
    mid_key: str = "mids:{coin}"
    book_key: str = "l2book:{coin}"
    universe_key: str = "universe:{coin}"


class ExchangeSettings(BaseSettings):
    """Hyperliquid exchange connection settings."""

    model_config = SettingsConfigDict(env_prefix="HYPERLIQUID_")

    wallet_address: str = ""
    private_key: SecretStr = SecretStr("")
    testnet: bool = False
    perp_symbol_template: str = "{coin}/USDC:USDC"  # ccxt unified perp symbol


class ExecutionSettings(BaseSettings):
    """Order pricing and submission parameters."""

    model_config = SettingsConfigDict(env_prefix="EXECUTION_")

    mode: Literal["paper", "live"] = "paper"
    min_order_size: Decimal = Field(default=Decimal("0.001"), gt=0)
    base_bps: Decimal = Decimal("15")  # offset above best ask on attempt 1
    bps_step: Decimal = Decimal("10")  # added per further attempt
    is_perpetual: bool = True
    target_size_decimals: int = Field(default=4, ge=0)
    tick_sizes: dict[str, Decimal] = Field(
        default_factory=lambda: {"ETH": Decimal("0.1"), "SOL": Decimal("0.01")}
    )

    @field_validator("tick_sizes")
    @classmethod
    def _positive_ticks(cls, value: dict[str, Decimal]) -> dict[str, Decimal]:
        for symbol, tick in value.items():
            if tick <= 0:
                raise ValueError(f"tick size for {symbol} must be positive, got {tick}")
        return value


class OrderEntry(BaseModel):
    """One configured order request: buy `target_usd_value` worth of `symbol`."""

    symbol: str
    target_usd_value: Decimal = Field(gt=0)


class BatchSettings(BaseSettings):
    """The batch of orders to time.

    BATCH_ORDERS accepts JSON, e.g. '[{"symbol": "ETH", "target_usd_value": 15}]'.
    """

    model_config = SettingsConfigDict(env_prefix="BATCH_")

    orders: list[OrderEntry] = Field(
        default_factory=lambda: [
            OrderEntry(symbol="SOL", target_usd_value=Decimal("15")),
            OrderEntry(symbol="ETH", target_usd_value=Decimal("15")),
        ]
    )
    attempt: int = Field(default=1, ge=1)


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    region: str = "unknown"  # label reported with the batch summary
    report_path: str | None = None  # optional JSON report destination
    redis: RedisSettings = RedisSettings()
    exchange: ExchangeSettings = ExchangeSettings()
    execution: ExecutionSettings = ExecutionSettings()
    batch: BatchSettings = BatchSettings()
