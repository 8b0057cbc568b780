"""
HTTP client integration for request signing

This module connects the BCE-Auth-V1 signer to the ``requests`` library so
outbound requests carry a Host header, an x-bce-date header and a matching
Authorization header.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from .types import (
    RequestInfo,
    SigningConfig,
    SigningError,
    SigningErrorCodes,
    BCE_DATE_HEADER,
)
from .bce_signer import BceV1Signer
from .signing_config import validate_signing_config
from .utils import generate_timestamp, split_url

logger = logging.getLogger(__name__)


class BceAuth(AuthBase):
    """
    ``requests`` authentication hook that signs every request.

    Usage::

        session = requests.Session()
        session.auth = BceAuth(config)
    """

    def __init__(self, config: SigningConfig):
        """
        Initialize the hook.

        Args:
            config: Signing configuration

        Raises:
            SigningError: If configuration is invalid
        """
        validate_signing_config(config)
        self.config = config
        self.signer = BceV1Signer(config.credential, config.log_canonical_request)

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        return _sign(request, self.config, self.signer)

    def __eq__(self, other):
        return isinstance(other, BceAuth) and self.config == other.config

    def __ne__(self, other):
        return not self == other


def sign_prepared_request(
    prepared_request: PreparedRequest,
    config: SigningConfig,
    timestamp: Optional[str] = None
) -> PreparedRequest:
    """
    Sign a prepared request in place.

    Args:
        prepared_request: Prepared request to sign
        config: Signing configuration
        timestamp: Optional x-bce-date value; defaults to the request's own
            x-bce-date header, then to the configured generator

    Returns:
        PreparedRequest: The same request with Authorization set

    Raises:
        SigningError: If signing fails
    """
    validate_signing_config(config)
    signer = BceV1Signer(config.credential, config.log_canonical_request)
    return _sign(prepared_request, config, signer, timestamp)


def create_signing_session(config: SigningConfig, **session_kwargs) -> requests.Session:
    """
    Create a requests session that signs every request.

    Args:
        config: Signing configuration
        **session_kwargs: Attributes to set on the session (e.g. verify, proxies)

    Returns:
        requests.Session: Session with BceAuth installed
    """
    session = requests.Session()

    for key, value in session_kwargs.items():
        if hasattr(session, key):
            setattr(session, key, value)

    session.auth = BceAuth(config)
    logger.info(f"Created signing session for access key: {config.credential.access_key}")
    return session


def _sign(
    prepared_request: PreparedRequest,
    config: SigningConfig,
    signer: BceV1Signer,
    timestamp: Optional[str] = None
) -> PreparedRequest:
    """
    Stamp Host and x-bce-date, then set Authorization.

    Args:
        prepared_request: Prepared request to sign
        config: Signing configuration
        signer: Signer holding the configured credential
        timestamp: Optional explicit x-bce-date value

    Returns:
        PreparedRequest: The signed request
    """
    if not prepared_request.method or not prepared_request.url:
        raise SigningError(
            "Prepared request must have a method and url",
            SigningErrorCodes.INVALID_REQUEST,
            {"method": prepared_request.method, "url": prepared_request.url}
        )

    host, path, params = split_url(prepared_request.url)
    headers = prepared_request.headers

    if 'host' not in headers:
        headers['Host'] = host

    if timestamp is None:
        timestamp = headers.get(BCE_DATE_HEADER)
    if timestamp is None:
        timestamp_gen = config.timestamp_generator or generate_timestamp
        timestamp = timestamp_gen()
    if isinstance(timestamp, bytes):
        timestamp = timestamp.decode('latin-1')
    headers[BCE_DATE_HEADER] = timestamp

    request_info = RequestInfo(
        method=prepared_request.method.upper(),
        url=path,
        headers=_header_snapshot(headers),
        params=params
    )
    authorization = signer.authorize(request_info, config.options_for(timestamp))
    headers['Authorization'] = authorization

    logger.debug(f"Signed {request_info.method} request to {prepared_request.url}")
    return prepared_request


def _header_snapshot(headers) -> Dict[str, Any]:
    """Copy headers in send order, decoding byte values as latin-1."""
    snapshot = {}
    for name, value in headers.items():
        if name.lower() == 'authorization':
            continue
        if isinstance(value, bytes):
            value = value.decode('latin-1')
        snapshot[name] = value
    return snapshot
