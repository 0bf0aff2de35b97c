from typing import List

from lxml import etree

from sitestatus.exceptions import ParseError
from sitestatus.logging.logger import setup_logger

logger = setup_logger(__name__)

URLSET_TAG = "urlset"
URL_TAG = "url"
LOC_TAG = "loc"


def _localname(element: etree._Element) -> str:
    # comments and processing instructions carry a non-string tag
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def parse_urlset(content: bytes, source: str = "") -> List[str]:
    """
    Parse a flat ``<urlset><url><loc>..</loc></url>..</urlset>`` document.

    Elements are matched by local name, so the standard sitemaps.org namespace
    is accepted as well as un-namespaced documents. Returns the ``loc`` texts
    in document order; ``url`` entries without a usable ``loc`` are skipped.

    Raises ParseError for malformed XML or a root element other than urlset.
    """
    if not content or not content.strip():
        raise ParseError(f"Empty sitemap body from {source}")

    parser = etree.XMLParser(recover=False, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(content, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise ParseError(f"Malformed sitemap XML from {source}: {e}")

    if _localname(root) != URLSET_TAG:
        raise ParseError(f"Unexpected root element '{root.tag}' in sitemap from {source}, expected '{URLSET_TAG}'")

    locations = []
    for url_element in root:
        if _localname(url_element) != URL_TAG:
            continue

        loc = next((child for child in url_element if _localname(child) == LOC_TAG), None)
        text = (loc.text or "").strip() if loc is not None else ""
        if not text:
            logger.warning(f"Skipping <url> entry without <loc> in sitemap from {source}")
            continue

        locations.append(text)

    logger.debug(f"Extracted {len(locations)} URL entries from {source}")
    return locations
