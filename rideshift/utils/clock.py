import asyncio
import secrets
import string
import time
from datetime import datetime, timezone

from ..config import settings

_ID_ALPHABET = string.ascii_lowercase + string.digits


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_id(prefix: str) -> str:
    """Build ids like ``ride_1700000000000_k3j9x0a1b``"""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{epoch_ms()}_{suffix}"


def generate_ride_id() -> str:
    return generate_id("ride")


def generate_proposal_id() -> str:
    return generate_id("prop")


def random_hex(length: int) -> str:
    """Random lowercase hex string of ``length`` characters"""
    return secrets.token_hex((length + 1) // 2)[:length]


async def simulate_latency(seconds: float):
    """Sleep to mimic a remote call; scaled by ``mock_latency_scale``"""
    delay = seconds * settings.mock_latency_scale
    if delay > 0:
        await asyncio.sleep(delay)
