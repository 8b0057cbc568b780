"""
BCE-Auth-V1 request signer

This module provides the main signer implementation. It derives a signing key
from the secret key and the auth-string prefix, signs the canonical request
with it and formats the Authorization header value.
"""

import logging
from collections.abc import Mapping

from .types import (
    BceCredential,
    RequestInfo,
    SigningOptions,
    SignatureContext,
    SigningError,
    SigningErrorCodes,
    AUTH_VERSION,
    DEFAULT_EXPIRE_IN_SECONDS,
)
from .utils import hex_hmac_sha256
from .canonical_request import (
    canonicalize_params,
    canonicalize_headers,
    build_canonical_request,
)

logger = logging.getLogger(__name__)


class BceV1Signer:
    """
    BCE-Auth-V1 signer

    Holds one immutable credential and turns request snapshots into
    Authorization header values. Instances keep no per-request state and can
    be shared between threads.
    """

    def __init__(self, credential: BceCredential, log_canonical_request: bool = False):
        """
        Initialize the signer with a credential.

        Args:
            credential: Access key / secret key pair
            log_canonical_request: Log canonical requests at DEBUG level

        Raises:
            SigningError: If credential is not a BceCredential
        """
        if not isinstance(credential, BceCredential):
            raise SigningError(
                "Credential must be BceCredential instance",
                SigningErrorCodes.INVALID_CREDENTIAL,
                {"credential_type": str(type(credential))}
            )

        self._credential = credential
        self.log_canonical_request = log_canonical_request

    @property
    def access_key(self) -> str:
        return self._credential.access_key

    def authorize(self, request: RequestInfo, options: SigningOptions) -> str:
        """
        Compute the Authorization header value for a request.

        Args:
            request: Request to sign
            options: Timestamp, headers to sign and expiry

        Returns:
            str: bce-auth-v1/{ak}/{timestamp}/{expire}/{signed headers}/{signature}

        Raises:
            SigningError: If request or options are malformed
        """
        context = self.create_context(request, options)
        return context.authorization

    def create_context(self, request: RequestInfo, options: SigningOptions) -> SignatureContext:
        """
        Compute every intermediate value of the signature.

        Errors raised by the HMAC primitive are not wrapped.

        Args:
            request: Request to sign
            options: Timestamp, headers to sign and expiry

        Returns:
            SignatureContext: Canonical request, signed headers, prefix,
                signing key and signature
        """
        self._validate_request(request)
        if not isinstance(options, SigningOptions):
            raise SigningError(
                "Options must be SigningOptions instance",
                SigningErrorCodes.INVALID_OPTIONS,
                {"options_type": str(type(options))}
            )

        signed_header_names, canonical_headers = canonicalize_headers(
            request.headers,
            options.header_names_to_sign
        )
        canonical_query = canonicalize_params(request.params)
        canonical_request = build_canonical_request(request, canonical_query, canonical_headers)

        expire = resolve_expire_in_seconds(options.expire_in_seconds)
        auth_string_prefix = f"{AUTH_VERSION}/{self._credential.access_key}/{options.timestamp}/{expire}"

        signing_key = hex_hmac_sha256(self._credential.secret_key, auth_string_prefix)
        signature = hex_hmac_sha256(signing_key, canonical_request)

        logger.debug(f"Signed {request.method} {request.url} with headers: {';'.join(signed_header_names)}")
        if self.log_canonical_request:
            logger.debug(f"Canonical request:\n{canonical_request}")

        return SignatureContext(
            canonical_request=canonical_request,
            signed_header_names=signed_header_names,
            auth_string_prefix=auth_string_prefix,
            signing_key=signing_key,
            signature=signature
        )

    def _validate_request(self, request: RequestInfo) -> None:
        """
        Check the shape of a request before canonicalization.

        Args:
            request: Request to validate

        Raises:
            SigningError: If a field has the wrong type
        """
        if not isinstance(request, RequestInfo):
            raise SigningError(
                "Request must be RequestInfo instance",
                SigningErrorCodes.INVALID_REQUEST,
                {"request_type": str(type(request))}
            )

        if not isinstance(request.method, str):
            raise SigningError(
                "Request method must be a string",
                SigningErrorCodes.INVALID_METHOD,
                {"method": repr(request.method)}
            )

        if not isinstance(request.url, str):
            raise SigningError(
                "Request url must be a string",
                SigningErrorCodes.INVALID_URL,
                {"url": repr(request.url)}
            )

        if not isinstance(request.headers, Mapping):
            raise SigningError(
                "Request headers must be a mapping",
                SigningErrorCodes.INVALID_HEADERS,
                {"headers_type": str(type(request.headers))}
            )

        if request.params is not None and isinstance(request.params, (str, bytes, Mapping)):
            raise SigningError(
                "Request params must be a sequence of (key, value) pairs",
                SigningErrorCodes.INVALID_PARAMS,
                {"params_type": str(type(request.params))}
            )


def resolve_expire_in_seconds(expire_in_seconds) -> int:
    """
    Return the effective token validity.

    Args:
        expire_in_seconds: Requested validity, may be None

    Returns:
        int: The requested value if positive, otherwise 1800
    """
    if expire_in_seconds and expire_in_seconds > 0:
        return expire_in_seconds
    return DEFAULT_EXPIRE_IN_SECONDS


def create_signer(credential: BceCredential) -> BceV1Signer:
    """
    Create a new BCE-Auth-V1 signer.

    Args:
        credential: Access key / secret key pair

    Returns:
        BceV1Signer: Configured signer instance
    """
    return BceV1Signer(credential)


def authorize_request(
    request: RequestInfo,
    credential: BceCredential,
    options: SigningOptions
) -> str:
    """
    Sign a request with the given credential.

    Args:
        request: Request to sign
        credential: Access key / secret key pair
        options: Timestamp, headers to sign and expiry

    Returns:
        str: Authorization header value
    """
    signer = create_signer(credential)
    return signer.authorize(request, options)
