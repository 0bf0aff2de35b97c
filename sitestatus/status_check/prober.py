import httpx

from sitestatus.logging.logger import setup_logger
from sitestatus.status_check.models import Site


class StatusProber:
    def __init__(self, client: httpx.AsyncClient, timeout: float = 10.0):
        self.client = client
        self.timeout = timeout
        self.logger = setup_logger(__name__)

    async def check(self, site: Site) -> Site:
        """GET the site once; up only on a 200. Never raises."""
        try:
            response = await self.client.get(site.url, timeout=self.timeout, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.debug(f"DOWN {site.url}: {e!r}")
            return site.with_status(False)

        up = response.status_code == httpx.codes.OK
        self.logger.debug(f"{'UP' if up else 'DOWN'} {site.url} [{response.status_code}]")
        return site.with_status(up)
