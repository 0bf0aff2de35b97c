class SiteStatusError(Exception):
    pass


class FetchError(SiteStatusError):
    """Sitemap could not be retrieved."""


class ParseError(SiteStatusError):
    """Sitemap body is not a well-formed urlset document."""


class TemplateError(SiteStatusError):
    """Status page template is missing or cannot be rendered."""
