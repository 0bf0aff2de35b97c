from typing import Dict, Optional

from pydantic import BaseModel, Field

DEFAULT_SITEMAP_URL = "https://musale.github.io/sitemap.xml"
DEFAULT_HEADERS = {"User-Agent": "SiteStatus/1.0 (+liveness probe)"}


class SitemapConfig(BaseModel):
    url: str = DEFAULT_SITEMAP_URL
    timeout: float = Field(default=30.0, gt=0)
    headers: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))


class ProbeConfig(BaseModel):
    timeout: float = Field(default=10.0, gt=0)
    concurrency: int = Field(default=20, ge=1)
    worker_timeout: float = Field(default=15.0, gt=0)
    batch_timeout: float = Field(default=300.0, gt=0)
    headers: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))


class SchedulerConfig(BaseModel):
    interval_seconds: float = Field(default=30 * 60, gt=0)
    run_on_startup: bool = True


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=9090, ge=1, le=65535)
    templates_dir: Optional[str] = None


class AppConfig(BaseModel):
    sitemap: SitemapConfig = Field(default_factory=SitemapConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
