import argparse

import uvicorn

from sitestatus.config.loaders.site_status_config_loader import get_app_config
from sitestatus.logging.logger import setup_logger
from sitestatus.web.app import create_app


def main():
    parser = argparse.ArgumentParser(description="Serve the sitemap liveness status page")
    parser.add_argument("--host", help="Interface to bind (overrides config)")
    parser.add_argument("--port", type=int, help="TCP port to listen on (overrides config)")
    parser.add_argument("--interval", type=float, help="Seconds between sitemap refreshes (overrides config)")
    parser.add_argument("--sitemap-url", help="Sitemap to monitor (overrides config)")
    args = parser.parse_args()

    logger = setup_logger(__name__)
    config = get_app_config()

    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.interval:
        config.scheduler.interval_seconds = args.interval
    if args.sitemap_url:
        config.sitemap.url = args.sitemap_url

    logger.info(
        f"Monitoring {config.sitemap.url} every {config.scheduler.interval_seconds}s "
        f"on {config.server.host}:{config.server.port}"
    )
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
