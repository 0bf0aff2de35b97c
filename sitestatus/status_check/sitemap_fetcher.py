from typing import Dict, List, Optional

import httpx

from sitestatus.exceptions import FetchError
from sitestatus.logging.logger import setup_logger
from sitestatus.status_check.core.sitemap_parser import parse_urlset
from sitestatus.status_check.models import Site
from sitestatus.status_check.utils.compression_utils import maybe_decompress


class SitemapFetcher:
    def __init__(self, client: httpx.AsyncClient, timeout: float = 30.0, headers: Optional[Dict[str, str]] = None):
        self.client = client
        self.timeout = timeout
        self.headers = headers
        self.logger = setup_logger(__name__)

    async def fetch(self, sitemap_url: str) -> List[Site]:
        """Download the sitemap and return one not-yet-probed Site per entry, in document order."""
        self.logger.info(f"Fetching sitemap: {sitemap_url}")
        try:
            response = await self.client.get(sitemap_url, timeout=self.timeout, headers=self.headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"Sitemap {sitemap_url} returned status {e.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Fetch failed for {sitemap_url}: {e!r}")

        content = maybe_decompress(sitemap_url, response.content)
        sites = [Site(url=loc) for loc in parse_urlset(content, sitemap_url)]

        self.logger.info(f"Sitemap {sitemap_url} lists {len(sites)} URLs")
        return sites
