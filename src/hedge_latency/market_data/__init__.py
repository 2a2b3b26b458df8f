"""Market data layer -- read-only access to the mid/book/universe cache."""

from hedge_latency.market_data.gateway import MarketDataGateway
from hedge_latency.market_data.redis_gateway import RedisMarketDataGateway

__all__ = ["MarketDataGateway", "RedisMarketDataGateway"]
