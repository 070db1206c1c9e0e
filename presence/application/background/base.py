"""Base classes for background refresh jobs."""

import asyncio
from abc import ABC, abstractmethod
from typing import ClassVar

import logfire

from presence.adapter.error import ProviderError


class BackgroundJob(ABC):
    """A task that runs for the life of the process."""

    name: ClassVar[str]

    @abstractmethod
    async def run_forever(self) -> None:
        """Run until cancelled."""
        pass


class PollingJob(BackgroundJob):
    """Refreshes a source cache on a fixed delay.

    A failed cycle is logged and skipped: cached snapshots are left exactly
    as they were and the next scheduled cycle is the retry.
    """

    def __init__(self, interval: float, run_on_start: bool = True) -> None:
        """Initialize polling job.

        Args:
            interval: Seconds to wait between the end of one cycle and the
                start of the next
            run_on_start: Run a cycle immediately instead of waiting first
        """
        self.interval = interval
        self.run_on_start = run_on_start

    @abstractmethod
    async def refresh(self) -> None:
        """Fetch upstream state and write it into the cache.

        Raises:
            ProviderError: If the upstream could not be read
        """
        pass

    async def refresh_once(self) -> bool:
        """Run one cycle, containing any failure.

        Returns:
            True if the cycle completed, False if it was skipped
        """
        with logfire.span("{job} refresh", job=self.name):
            try:
                await self.refresh()
            except ProviderError as e:
                logfire.error(
                    "Refresh failed, keeping cached snapshots",
                    job=self.name,
                    provider=e.provider,
                    error=str(e),
                )
                return False
            except Exception:
                logfire.exception(
                    "Unexpected refresh failure, keeping cached snapshots",
                    job=self.name,
                )
                return False
            return True

    async def run_forever(self) -> None:
        """Refresh on schedule until cancelled."""
        logfire.info("Started refresh job", job=self.name, interval=self.interval)
        if not self.run_on_start:
            await asyncio.sleep(self.interval)

        while True:
            await self.refresh_once()
            await asyncio.sleep(self.interval)
