"""Redis-backed market-data gateway.

Reads JSON values written by the market-data feed under per-coin keys
(``mids:{coin}``, ``l2book:{coin}``, ``universe:{coin}`` by default) and
validates them through the wire schemas.
"""

from decimal import Decimal
from typing import TypeVar

import redis.asyncio as aioredis
from pydantic import BaseModel, ValidationError
from redis.exceptions import RedisError

from hedge_latency.config import RedisSettings
from hedge_latency.exceptions import ConnectionFailure, DataUnavailable
from hedge_latency.logging import get_logger
from hedge_latency.market_data.gateway import (
    BOOK_SNAPSHOT,
    INSTRUMENT_META,
    MID_PRICE,
    MarketDataGateway,
)
from hedge_latency.market_data.schemas import (
    L2BookPayload,
    MidPricePayload,
    UniversePayload,
)
from hedge_latency.models import BookSnapshot, InstrumentMeta

logger = get_logger(__name__)

_Payload = TypeVar("_Payload", bound=BaseModel)


class RedisMarketDataGateway(MarketDataGateway):
    """Market-data gateway over a single redis.asyncio client.

    Args:
        settings: Redis URL and key templates.
        client: Optional pre-built client (tests inject a mock).
    """

    def __init__(
        self, settings: RedisSettings, client: aioredis.Redis | None = None
    ) -> None:
        self._settings = settings
        self._client = client or aioredis.from_url(
            settings.url, decode_responses=True
        )

    async def connect(self) -> None:
        """Verify the cache is reachable."""
        logger.info("connecting_to_redis")
        try:
            await self._client.ping()
        except (RedisError, OSError) as exc:
            logger.error("redis_connect_failed", error=str(exc))
            raise ConnectionFailure("redis", str(exc)) from exc
        logger.info("redis_connected")

    async def close(self) -> None:
        logger.info("closing_redis_connection")
        await self._client.aclose()

    async def get_mid_price(self, symbol: str) -> Decimal:
        payload = await self._load(
            symbol, MID_PRICE, self._settings.mid_key, MidPricePayload
        )
        return payload.root

    async def get_book_snapshot(self, symbol: str) -> BookSnapshot:
        payload = await self._load(
            symbol, BOOK_SNAPSHOT, self._settings.book_key, L2BookPayload
        )
        return payload.to_snapshot(symbol)

    async def get_instrument_meta(self, symbol: str) -> InstrumentMeta:
        payload = await self._load(
            symbol, INSTRUMENT_META, self._settings.universe_key, UniversePayload
        )
        return payload.to_meta()

    async def _load(
        self,
        symbol: str,
        resource: str,
        key_template: str,
        schema: type[_Payload],
    ) -> _Payload:
        """GET a key and validate its JSON value against `schema`.

        Raises:
            DataUnavailable: If the key is missing, the read fails, the value
                is not valid UTF-8, or it does not match the schema.
        """
        key = key_template.format(coin=symbol)
        try:
            raw = await self._client.get(key)
        except RedisError as exc:
            raise DataUnavailable(symbol, resource, f"read failed: {exc}") from exc
        except UnicodeDecodeError as exc:
            # decode_responses=True decodes inside GET
            logger.warning("cache_value_undecodable", key=key, resource=resource)
            raise DataUnavailable(
                symbol, resource, f"undecodable value at {key}"
            ) from exc

        if raw is None:
            logger.warning("cache_key_missing", key=key, resource=resource)
            raise DataUnavailable(symbol, resource, f"key {key} missing")

        try:
            return schema.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "cache_value_malformed",
                key=key,
                resource=resource,
                errors=exc.error_count(),
            )
            raise DataUnavailable(
                symbol, resource, f"malformed value at {key}"
            ) from exc
