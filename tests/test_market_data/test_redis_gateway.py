"""Tests for RedisMarketDataGateway and the cache wire schemas.

The redis client is replaced by an AsyncMock backed by a plain dict.
"""

import json
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from hedge_latency.config import RedisSettings
from hedge_latency.exceptions import ConnectionFailure, DataUnavailable
from hedge_latency.market_data.redis_gateway import RedisMarketDataGateway

ETH_BOOK = {
    "coin": "ETH",
    "time": 1700000000123,
    "levels": [
        [{"px": "3456.5", "sz": "12.1", "n": 4}, {"px": "3456.4", "sz": "3.0", "n": 1}],
        [{"px": "3456.7", "sz": "8.25", "n": 2}, {"px": "3456.8", "sz": "1.5", "n": 1}],
    ],
}


@pytest.fixture
def store() -> dict[str, str]:
    return {
        "mids:ETH": json.dumps("3456.6"),
        "l2book:ETH": json.dumps(ETH_BOOK),
        "universe:ETH": json.dumps({"name": "ETH", "szDecimals": 4, "maxLeverage": 25}),
    }


@pytest.fixture
def redis_client(store: dict[str, str]) -> AsyncMock:
    client = AsyncMock()
    client.get.side_effect = lambda key: store.get(key)
    return client


@pytest.fixture
def gateway(redis_client: AsyncMock) -> RedisMarketDataGateway:
    return RedisMarketDataGateway(RedisSettings(), client=redis_client)


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_connect_pings(
        self, gateway: RedisMarketDataGateway, redis_client: AsyncMock
    ) -> None:
        await gateway.connect()
        redis_client.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unreachable_cache_is_connection_failure(
        self, gateway: RedisMarketDataGateway, redis_client: AsyncMock
    ) -> None:
        redis_client.ping.side_effect = RedisConnectionError("Connection refused")
        with pytest.raises(ConnectionFailure) as exc_info:
            await gateway.connect()
        assert exc_info.value.target == "redis"

    @pytest.mark.asyncio
    async def test_close(
        self, gateway: RedisMarketDataGateway, redis_client: AsyncMock
    ) -> None:
        await gateway.close()
        redis_client.aclose.assert_awaited_once()


class TestMidPrice:
    @pytest.mark.asyncio
    async def test_string_mid(self, gateway: RedisMarketDataGateway) -> None:
        assert await gateway.get_mid_price("ETH") == Decimal("3456.6")

    @pytest.mark.asyncio
    async def test_numeric_mid(
        self, gateway: RedisMarketDataGateway, store: dict[str, str]
    ) -> None:
        store["mids:SOL"] = "142.5"
        assert await gateway.get_mid_price("SOL") == Decimal("142.5")

    @pytest.mark.asyncio
    async def test_missing_mid(self, gateway: RedisMarketDataGateway) -> None:
        with pytest.raises(DataUnavailable) as exc_info:
            await gateway.get_mid_price("SOL")
        assert exc_info.value.symbol == "SOL"
        assert exc_info.value.resource == "mid_price"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ['"abc"', "0", "-1", "{not json"])
    async def test_malformed_mid(
        self, gateway: RedisMarketDataGateway, store: dict[str, str], raw: str
    ) -> None:
        store["mids:ETH"] = raw
        with pytest.raises(DataUnavailable):
            await gateway.get_mid_price("ETH")


class TestBookSnapshot:
    @pytest.mark.asyncio
    async def test_parses_levels(self, gateway: RedisMarketDataGateway) -> None:
        book = await gateway.get_book_snapshot("ETH")

        assert book.symbol == "ETH"
        assert book.timestamp == 1700000000123
        assert book.best_ask == Decimal("3456.7")
        assert book.bid_levels[0].price == Decimal("3456.5")
        assert book.ask_levels[0].size == Decimal("8.25")
        assert book.ask_levels[0].order_count == 2
        assert len(book.ask_levels) == 2

    @pytest.mark.asyncio
    async def test_unlisted_symbol(self, gateway: RedisMarketDataGateway) -> None:
        with pytest.raises(DataUnavailable) as exc_info:
            await gateway.get_book_snapshot("XYZ")
        assert exc_info.value.resource == "l2_book"
        assert "l2book:XYZ" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_empty_ask_side(
        self, gateway: RedisMarketDataGateway, store: dict[str, str]
    ) -> None:
        store["l2book:ETH"] = json.dumps({"levels": [ETH_BOOK["levels"][0], []]})
        with pytest.raises(DataUnavailable):
            await gateway.get_book_snapshot("ETH")

    @pytest.mark.asyncio
    async def test_missing_levels(
        self, gateway: RedisMarketDataGateway, store: dict[str, str]
    ) -> None:
        store["l2book:ETH"] = json.dumps({"coin": "ETH"})
        with pytest.raises(DataUnavailable):
            await gateway.get_book_snapshot("ETH")

    @pytest.mark.asyncio
    async def test_bad_price(
        self, gateway: RedisMarketDataGateway, store: dict[str, str]
    ) -> None:
        store["l2book:ETH"] = json.dumps({"levels": [[], [{"px": "n/a", "sz": "1"}]]})
        with pytest.raises(DataUnavailable):
            await gateway.get_book_snapshot("ETH")


class TestInstrumentMeta:
    @pytest.mark.asyncio
    async def test_parses_universe(self, gateway: RedisMarketDataGateway) -> None:
        meta = await gateway.get_instrument_meta("ETH")
        assert meta.name == "ETH"
        assert meta.size_decimals == 4
        assert meta.max_leverage == 25
        assert meta.tick_size is None

    @pytest.mark.asyncio
    async def test_size_decimals_default(
        self, gateway: RedisMarketDataGateway, store: dict[str, str]
    ) -> None:
        store["universe:SOL"] = json.dumps({"name": "SOL", "tickSize": "0.01"})
        meta = await gateway.get_instrument_meta("SOL")
        assert meta.size_decimals == 4
        assert meta.tick_size == Decimal("0.01")

    @pytest.mark.asyncio
    async def test_negative_size_decimals(
        self, gateway: RedisMarketDataGateway, store: dict[str, str]
    ) -> None:
        store["universe:ETH"] = json.dumps({"name": "ETH", "szDecimals": -1})
        with pytest.raises(DataUnavailable) as exc_info:
            await gateway.get_instrument_meta("ETH")
        assert exc_info.value.resource == "universe"

    @pytest.mark.asyncio
    async def test_custom_key_layout(self, redis_client: AsyncMock) -> None:
        gateway = RedisMarketDataGateway(
            RedisSettings(universe_key="hl:meta:{coin}"), client=redis_client
        )
        with pytest.raises(DataUnavailable):
            await gateway.get_instrument_meta("ETH")
        redis_client.get.assert_awaited_with("hl:meta:ETH")


class TestUndecodableValue:
    @pytest.mark.asyncio
    async def test_non_utf8_value_is_data_unavailable(
        self, gateway: RedisMarketDataGateway, redis_client: AsyncMock
    ) -> None:
        decode_error = UnicodeDecodeError("utf-8", b"\xff\xfe", 0, 1, "invalid start byte")
        redis_client.get.side_effect = decode_error

        with pytest.raises(DataUnavailable) as exc_info:
            await gateway.get_mid_price("ETH")

        assert exc_info.value.resource == "mid_price"
        assert "undecodable value at mids:ETH" in str(exc_info.value)
        assert exc_info.value.__cause__ is decode_error
