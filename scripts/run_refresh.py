import argparse
import asyncio
import sys

from sitestatus.config.loaders.site_status_config_loader import get_app_config
from sitestatus.exceptions import SiteStatusError
from sitestatus.logging.logger import setup_logger
from sitestatus.status_check.orchestrator import RefreshOrchestrator
from sitestatus.status_check.store import SiteStore


def main():
    parser = argparse.ArgumentParser(description="Check every URL of a sitemap once")
    parser.add_argument(
        "sitemap_url",
        nargs="?",
        help="Sitemap URL (overrides config if provided)",
    )
    args = parser.parse_args()

    logger = setup_logger(__name__)
    config = get_app_config()
    if args.sitemap_url:
        config.sitemap.url = args.sitemap_url
        logger.info(f"Using sitemap from CLI: {config.sitemap.url}")

    async def run() -> int:
        orchestrator = RefreshOrchestrator(SiteStore(), config.sitemap, config.probe)
        try:
            sites = await orchestrator.refresh()
        except SiteStatusError as e:
            logger.error(f"Check failed: {e}")
            return 1
        finally:
            await orchestrator.close()

        for site in sites:
            logger.info(f"{'UP  ' if site.up else 'DOWN'} {site.url}")
        logger.info(f"TOTAL={len(sites)} UP={sum(s.up for s in sites)}")
        return 0

    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
