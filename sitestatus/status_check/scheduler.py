import asyncio
from typing import Optional

from sitestatus.exceptions import SiteStatusError
from sitestatus.logging.logger import setup_logger
from sitestatus.status_check.orchestrator import RefreshOrchestrator


class RefreshScheduler:
    """
    Triggers a refresh right away and then every ``interval`` seconds.

    At most one refresh runs at a time: a tick that arrives while the previous
    refresh is still in flight is skipped. Failed refreshes are logged and the
    loop keeps going.
    """

    def __init__(self, orchestrator: RefreshOrchestrator, interval: float, run_on_startup: bool = True):
        self.orchestrator = orchestrator
        self.interval = interval
        self.run_on_startup = run_on_startup
        self.logger = setup_logger(__name__)
        self._loop_task: Optional[asyncio.Task] = None
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def refreshing(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    def start(self) -> None:
        if self.running:
            return
        self.logger.info(f"Starting refresh scheduler (interval={self.interval}s)")
        self._loop_task = asyncio.create_task(self._run(), name="site-refresh-scheduler")

    async def stop(self) -> None:
        tasks = [t for t in (self._loop_task, self._refresh_task) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._loop_task = None
        self._refresh_task = None

    def trigger(self) -> bool:
        if self.refreshing:
            self.logger.warning("Refresh still in progress, skipping this tick")
            return False
        self._refresh_task = asyncio.create_task(self._refresh_once(), name="site-refresh")
        return True

    async def _run(self) -> None:
        if self.run_on_startup:
            self.trigger()
        while True:
            await asyncio.sleep(self.interval)
            self.logger.info("Refreshing the sites store")
            self.trigger()

    async def _refresh_once(self) -> None:
        try:
            await self.orchestrator.refresh()
        except SiteStatusError as e:
            self.logger.error(f"Refresh aborted, keeping {len(self.orchestrator.store)} previous sites: {e}")
        except Exception:
            self.logger.exception("Unexpected error during scheduled refresh")
