"""Health check module for the database dependency."""

import asyncio
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine


@dataclass
class ServiceHealth:
    """Health status for a service dependency."""

    status: Literal["connected", "unreachable", "error"]
    latency_ms: float | None = None
    error: str | None = None
    dialect: str | None = None
    server_time: datetime | None = None


async def check_database(engine: AsyncEngine, timeout: float = 2.0) -> ServiceHealth:
    """Check database connectivity with a SELECT CURRENT_TIMESTAMP query.

    Args:
        engine: Engine to probe (the application's pool)
        timeout: Seconds before the database counts as unreachable

    Returns:
        ServiceHealth with connection status, latency and server time
    """
    start = time.perf_counter()
    try:
        async with asyncio.timeout(timeout):
            async with engine.connect() as conn:
                result = await conn.execute(text("SELECT CURRENT_TIMESTAMP"))
                server_time = result.scalar()
            latency = (time.perf_counter() - start) * 1000
            return ServiceHealth(
                status="connected",
                latency_ms=round(latency, 2),
                dialect=engine.dialect.name,
                # SQLite returns the timestamp as a string
                server_time=server_time if isinstance(server_time, datetime) else None,
            )
    except asyncio.TimeoutError:
        return ServiceHealth(status="unreachable", error="timeout", dialect=engine.dialect.name)
    except Exception as e:
        return ServiceHealth(status="error", error=str(e), dialect=engine.dialect.name)
