"""
Canonical request construction for BCE-Auth-V1 signatures

This module builds the canonical query string, the canonical header block
and the canonical request that is fed to the final HMAC.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .types import (
    RequestInfo,
    BCE_HEADER_PREFIX,
    DEFAULT_HEADERS_TO_SIGN,
)
from .utils import normalize


def canonicalize_params(params: Optional[Iterable[Tuple[str, str]]]) -> str:
    """
    Build the canonical query string.

    Pairs whose key is ``authorization`` (any case) are dropped. Duplicate
    keys are kept as separate entries.

    Args:
        params: Query parameters as (key, value) pairs, or None

    Returns:
        str: Sorted ``key=value`` entries joined with ``&``
    """
    if not params:
        return ''

    entries = [
        f"{normalize(key)}={normalize(value)}"
        for key, value in params
        if key.lower() != 'authorization'
    ]
    return '&'.join(sorted(entries))


def canonicalize_headers(
    headers: Mapping[str, Any],
    header_names_to_sign: Optional[List[str]] = None
) -> Tuple[List[str], str]:
    """
    Select the headers to sign and build the canonical header block.

    A header is signed when its (stripped) value is non-empty and its
    lower-cased name is either listed in ``header_names_to_sign`` or starts
    with ``x-bce-``. Values that are not strings are not stripped; booleans
    are rendered as ``true``/``false``.

    Args:
        headers: Request headers, in the order they will be sent
        header_names_to_sign: Lower-case header names; defaults to
            host, content-md5, content-length and content-type

    Returns:
        tuple: (signed header names in input order, sorted canonical block
            joined with newlines)
    """
    if header_names_to_sign is None:
        header_names_to_sign = DEFAULT_HEADERS_TO_SIGN

    signed_header_names = []
    canonical_headers = []

    for name, value in headers.items():
        header_name = name.lower()
        header_value = value.strip() if isinstance(value, str) else value

        if not header_value:
            continue

        if header_name in header_names_to_sign or header_name.startswith(BCE_HEADER_PREFIX):
            signed_header_names.append(header_name)
            canonical_headers.append(f"{normalize(header_name)}:{normalize(_header_text(header_value))}")

    return signed_header_names, '\n'.join(sorted(canonical_headers))


def _header_text(value: Any) -> str:
    # Booleans go on the wire as true/false
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def build_canonical_request(
    request: RequestInfo,
    canonical_query: str,
    canonical_headers: str
) -> str:
    """
    Join method, url, canonical query and canonical headers.

    Args:
        request: Request being signed
        canonical_query: Output of canonicalize_params
        canonical_headers: Canonical block from canonicalize_headers

    Returns:
        str: Canonical request
    """
    return '\n'.join([request.method, request.url, canonical_query, canonical_headers])
