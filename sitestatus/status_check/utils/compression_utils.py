import gzip
import zlib

import brotli

from sitestatus.exceptions import ParseError


def maybe_decompress(url: str, content: bytes) -> bytes:
    if content[:2] == b"\x1f\x8b":  # GZIP
        try:
            return gzip.decompress(content)
        except (OSError, EOFError, zlib.error) as e:
            raise ParseError(f"Gzip decompression failed for {url}: {e}")

    # plain XML always starts with "<" (optionally after a BOM or whitespace)
    if content.lstrip(b"\xef\xbb\xbf \t\r\n")[:1] == b"<":
        return content

    try:
        return brotli.decompress(content)
    except brotli.error:
        pass

    return content
