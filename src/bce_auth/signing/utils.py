"""
Utility functions for request signing

This module provides the encoding, hashing and timestamp helpers used by the
BCE-Auth-V1 signer and its HTTP integrations.
"""

import time
from typing import Optional, Tuple
from urllib.parse import quote, unquote, urlsplit, parse_qsl

from cryptography.hazmat.primitives import hashes, hmac

from .types import (
    SigningError,
    SigningErrorCodes,
    QueryParams,
)

# quote() never escapes letters, digits and "_.-~"
NORMALIZE_SAFE_CHARS = ''


def normalize(value: str) -> str:
    """
    Percent-encode a string for canonical requests.

    Every character outside ``A-Z a-z 0-9 - _ . ~`` is escaped as ``%XX``
    using upper-case hex over its UTF-8 bytes. Space becomes ``%20`` and
    ``! ' ( ) *`` become ``%21 %27 %28 %29 %2A``.

    Args:
        value: String to encode

    Returns:
        str: Encoded string
    """
    return quote(value, safe=NORMALIZE_SAFE_CHARS)


def hex_hmac_sha256(key: str, data: str) -> str:
    """
    Compute HMAC-SHA256 and return it as lowercase hex.

    Args:
        key: HMAC key, UTF-8 encoded before use
        data: Message, UTF-8 encoded before use

    Returns:
        str: 64 character hex digest
    """
    mac = hmac.HMAC(key.encode('utf-8'), hashes.SHA256())
    mac.update(data.encode('utf-8'))
    return to_hex(mac.finalize())


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hex string.

    Args:
        data: Bytes to convert

    Returns:
        str: Lowercase hex string
    """
    return data.hex()


def generate_timestamp(timestamp: Optional[float] = None) -> str:
    """
    Format a Unix timestamp the way BCE expects it in x-bce-date.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: UTC timestamp such as 2015-04-27T08:23:49Z
    """
    if timestamp is None:
        timestamp = time.time()

    dt = time.gmtime(timestamp)
    return time.strftime('%Y-%m-%dT%H:%M:%SZ', dt)


def split_url(url: str) -> Tuple[str, str, QueryParams]:
    """
    Split a full request URL into the parts needed for signing.

    Args:
        url: Absolute URL, as sent on the wire

    Returns:
        tuple: (host, path, query params). The path is decoded and then
            re-encoded with the normalizer rules, keeping "/" as the segment
            separator. Blank query values are preserved.

    Raises:
        SigningError: If URL format is invalid
    """
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise SigningError(
            f"Failed to parse URL: {e}",
            SigningErrorCodes.INVALID_URL,
            {"url": url, "original_error": str(e)}
        )

    if not parsed.scheme or not parsed.netloc:
        raise SigningError(
            f"Invalid URL format: {url}",
            SigningErrorCodes.INVALID_URL,
            {"url": url}
        )

    if parsed.scheme not in ('http', 'https'):
        raise SigningError(
            f"Unsupported URL scheme: {parsed.scheme}",
            SigningErrorCodes.INVALID_URL,
            {"url": url, "scheme": parsed.scheme}
        )

    path = quote(unquote(parsed.path), safe="/") or "/"
    params = parse_qsl(parsed.query, keep_blank_values=True)
    host = parsed.netloc.rpartition("@")[2]
    return host, path, params
