from typing import Optional, Tuple

import httpx

from sitestatus.config.models.app_config_model import SitemapConfig, ProbeConfig
from sitestatus.logging.logger import setup_logger
from sitestatus.status_check.core.async_worker_pool import AsyncWorkerPool
from sitestatus.status_check.models import Site
from sitestatus.status_check.prober import StatusProber
from sitestatus.status_check.sitemap_fetcher import SitemapFetcher
from sitestatus.status_check.store import SiteStore


def _mark_down(site: Site) -> Site:
    return site.with_status(False)


class RefreshOrchestrator:
    def __init__(
        self,
        store: SiteStore,
        sitemap_config: SitemapConfig,
        probe_config: ProbeConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.store = store
        self.sitemap_config = sitemap_config
        self.probe_config = probe_config
        self.logger = setup_logger(__name__)

        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            headers=probe_config.headers,
            timeout=probe_config.timeout,
            http2=True,
            follow_redirects=True,
            limits=httpx.Limits(
                max_connections=max(50, probe_config.concurrency * 2),
                max_keepalive_connections=max(25, probe_config.concurrency)
            ),
        )
        self.fetcher = SitemapFetcher(self.client, sitemap_config.timeout, sitemap_config.headers)
        self.prober = StatusProber(self.client, probe_config.timeout)
        self.pool: AsyncWorkerPool[Site, Site] = AsyncWorkerPool(
            concurrency=probe_config.concurrency,
            processor=self.prober.check,
            fallback=_mark_down,
            worker_timeout=probe_config.worker_timeout,
            batch_timeout=probe_config.batch_timeout,
        )

    async def refresh(self) -> Tuple[Site, ...]:
        """
        Fetch the sitemap, probe every listed site and publish the results.

        A failed fetch or parse is re-raised and the store keeps its previous
        contents. The store is replaced only once the whole probe batch is done,
        with sites in sitemap order.
        """
        sites = await self.fetcher.fetch(self.sitemap_config.url)

        checked = tuple(await self.pool.process_items(sites))
        self.store.replace(checked)

        up = sum(1 for site in checked if site.up)
        self.logger.info(f"Refreshed {len(checked)} sites: {up} up, {len(checked) - up} down")
        return checked

    async def close(self):
        if self._owns_client:
            await self.client.aclose()
