from pydantic import BaseModel, ConfigDict, Field


class Site(BaseModel):
    """A URL listed in the sitemap and the outcome of its most recent probe."""
    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    up: bool = False

    def with_status(self, up: bool) -> "Site":
        return self.model_copy(update={"up": up})
