"""Background task manager for refresh jobs."""

import asyncio

import logfire

from presence.application.background.base import BackgroundJob


class BackgroundRefresher:
    """Runs each refresh job as its own asyncio task.

    Jobs share nothing but the caches they write, so they are started and
    stopped independently of one another.
    """

    def __init__(self, jobs: list[BackgroundJob]) -> None:
        self.jobs = list(jobs)
        self._tasks: dict[str, asyncio.Task[None]] = {}

    @property
    def running(self) -> list[str]:
        """Names of jobs whose task is still alive."""
        return [name for name, task in self._tasks.items() if not task.done()]

    def start(self) -> None:
        """Start every job that is not already running."""
        for job in self.jobs:
            if job.name in self._tasks and not self._tasks[job.name].done():
                continue
            task = asyncio.create_task(job.run_forever(), name=f"refresh:{job.name}")
            task.add_done_callback(self._on_task_done)
            self._tasks[job.name] = task
        logfire.info("Background refresher started", jobs=[job.name for job in self.jobs])

    async def stop(self) -> None:
        """Cancel every job without waiting for in-flight cycles to finish."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        logfire.info("Background refresher stopped")

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logfire.error(
                "Background job exited",
                task=task.get_name(),
                error=str(error),
                error_type=type(error).__name__,
            )
