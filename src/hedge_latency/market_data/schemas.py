"""Wire schemas for market-data cache values.

The cache stores the venue's native JSON shapes. Each payload is validated
here and converted into the Decimal domain models; anything that does not
fit the schema is reported as DataUnavailable by the gateway.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from hedge_latency.models import BookLevel, BookSnapshot, InstrumentMeta


class MidPricePayload(RootModel[Decimal]):
    """A mid price stored as a bare JSON number or numeric string."""

    @field_validator("root")
    @classmethod
    def _positive(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or value <= 0:
            raise ValueError(f"mid price must be positive, got {value}")
        return value


class LevelPayload(BaseModel):
    """One book level: {"px": "150.0", "sz": "12.5", "n": 3}."""

    model_config = ConfigDict(extra="ignore")

    px: Decimal = Field(gt=0)
    sz: Decimal = Field(ge=0)
    n: int | None = None

    def to_level(self) -> BookLevel:
        return BookLevel(price=self.px, size=self.sz, order_count=self.n)


class L2BookPayload(BaseModel):
    """Level-2 book: levels[0] holds bids, levels[1] holds asks."""

    model_config = ConfigDict(extra="ignore")

    coin: str | None = None
    time: int | None = None
    levels: tuple[list[LevelPayload], list[LevelPayload]]

    @field_validator("levels")
    @classmethod
    def _asks_present(
        cls, value: tuple[list[LevelPayload], list[LevelPayload]]
    ) -> tuple[list[LevelPayload], list[LevelPayload]]:
        if not value[1]:
            raise ValueError("ask side is empty")
        return value

    def to_snapshot(self, symbol: str) -> BookSnapshot:
        bids, asks = self.levels
        return BookSnapshot(
            symbol=self.coin or symbol,
            bid_levels=tuple(level.to_level() for level in bids),
            ask_levels=tuple(level.to_level() for level in asks),
            timestamp=self.time,
        )


class UniversePayload(BaseModel):
    """Instrument metadata: {"name": "ETH", "szDecimals": 4, "maxLeverage": 25}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(min_length=1)
    sz_decimals: int = Field(default=4, ge=0, alias="szDecimals")
    tick_size: Decimal | None = Field(default=None, gt=0, alias="tickSize")
    max_leverage: int | None = Field(default=None, alias="maxLeverage")

    def to_meta(self) -> InstrumentMeta:
        return InstrumentMeta(
            name=self.name,
            size_decimals=self.sz_decimals,
            tick_size=self.tick_size,
            max_leverage=self.max_leverage,
        )
