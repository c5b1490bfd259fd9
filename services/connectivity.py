"""Network availability check performed before any remote call."""

from __future__ import annotations

import asyncio
import logging

from settings import get_settings

logger = logging.getLogger(__name__)


class ConnectivityProbe:
    """Reports whether a network route to the weather provider is currently up."""

    def __init__(self, host: str, port: int = 443, timeout: float = 3.0) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout

    async def is_available(self) -> bool:
        try:
            _reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=self.timeout
            )
        except (OSError, asyncio.TimeoutError) as exc:
            logger.info("No active network transport", extra={"reason": str(exc) or "timeout"})
            return False
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True


def build_default_probe() -> ConnectivityProbe:
    settings = get_settings()
    return ConnectivityProbe(
        host=settings.connectivity_host, port=settings.connectivity_port
    )
