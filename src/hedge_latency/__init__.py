"""Latency-measured IOC hedge order client."""
