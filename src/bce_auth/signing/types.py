"""
Type definitions for request signing functionality

This module provides type definitions and data classes for the BCE-Auth-V1
request signing scheme.
"""

from typing import Dict, List, Optional, Callable, Any, Mapping, Sequence, Tuple
from dataclasses import dataclass, field


AUTH_VERSION = "bce-auth-v1"
DEFAULT_EXPIRE_IN_SECONDS = 1800
DEFAULT_HEADERS_TO_SIGN = ['host', 'content-md5', 'content-length', 'content-type']
BCE_HEADER_PREFIX = 'x-bce-'
BCE_DATE_HEADER = 'x-bce-date'


@dataclass(frozen=True)
class BceCredential:
    """
    Access key / secret key pair used to sign requests

    Attributes:
        access_key: Public access key identifier (AK)
        secret_key: Shared secret (SK), never included in repr
    """
    access_key: str
    secret_key: str = field(repr=False)

    def __post_init__(self):
        """Validate credential after initialization"""
        if not isinstance(self.access_key, str) or not self.access_key:
            raise ValueError("Access key must be a non-empty string")

        if not isinstance(self.secret_key, str) or not self.secret_key:
            raise ValueError("Secret key must be a non-empty string")


@dataclass
class RequestInfo:
    """
    Snapshot of an outgoing request to be signed

    Attributes:
        method: Upper-case HTTP method (GET, PUT, etc.)
        url: Request path without query string
        headers: Request headers in the order they will be sent
        params: Query parameters as ordered (key, value) pairs
    """
    method: str
    url: str
    headers: Mapping[str, Any]
    params: Optional[Sequence[Tuple[str, str]]] = None


@dataclass
class SigningOptions:
    """
    Signing options for individual requests

    Attributes:
        timestamp: UTC timestamp string, e.g. 2015-04-27T08:23:49Z
        header_names_to_sign: Header names to sign besides x-bce-* headers
        expire_in_seconds: Validity of the token; non-positive means default
    """
    timestamp: str
    header_names_to_sign: Optional[List[str]] = None
    expire_in_seconds: Optional[int] = None

    def __post_init__(self):
        """Validate options and normalize header names"""
        if not isinstance(self.timestamp, str) or not self.timestamp:
            raise ValueError("Timestamp must be a non-empty string")

        if self.header_names_to_sign is not None:
            self.header_names_to_sign = [h.lower() for h in self.header_names_to_sign]


@dataclass
class SignatureContext:
    """
    Intermediate values computed while signing one request

    Attributes:
        canonical_request: Exact input of the final HMAC
        signed_header_names: Lower-cased names of signed headers, in input order
        auth_string_prefix: bce-auth-v1/{ak}/{timestamp}/{expire}
        signing_key: Hex HMAC of the prefix under the secret key
        signature: Hex HMAC of the canonical request under the signing key
    """
    canonical_request: str
    signed_header_names: List[str]
    auth_string_prefix: str
    signing_key: str = field(repr=False)
    signature: str

    @property
    def authorization(self) -> str:
        """Authorization header value for this context"""
        return f"{self.auth_string_prefix}/{';'.join(self.signed_header_names)}/{self.signature}"


@dataclass
class SigningConfig:
    """
    Long-lived configuration used by HTTP integrations

    Attributes:
        credential: Credential used to sign every request
        header_names_to_sign: Header names to sign besides x-bce-* headers
        expire_in_seconds: Validity of generated tokens
        timestamp_generator: Optional custom timestamp generator function
        log_canonical_request: Log canonical requests at DEBUG level
    """
    credential: BceCredential
    header_names_to_sign: List[str] = field(default_factory=lambda: list(DEFAULT_HEADERS_TO_SIGN))
    expire_in_seconds: int = DEFAULT_EXPIRE_IN_SECONDS
    timestamp_generator: Optional[Callable[[], str]] = None
    log_canonical_request: bool = False

    def __post_init__(self):
        """Validate signing configuration"""
        if not isinstance(self.credential, BceCredential):
            raise ValueError("Credential must be BceCredential instance")

        if not isinstance(self.header_names_to_sign, list) or \
           not all(isinstance(h, str) for h in self.header_names_to_sign):
            raise ValueError("Header names to sign must be a list of strings")

        self.header_names_to_sign = [h.lower() for h in self.header_names_to_sign]

    def options_for(self, timestamp: str) -> SigningOptions:
        """Build per-request signing options stamped with the given timestamp."""
        return SigningOptions(
            timestamp=timestamp,
            header_names_to_sign=list(self.header_names_to_sign),
            expire_in_seconds=self.expire_in_seconds
        )


class SigningError(Exception):
    """
    Error class for signing operations

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.code}, details: {self.details})"
        return f"{self.message} (code: {self.code})"

    def __repr__(self) -> str:
        return f"SigningError(message='{self.message}', code='{self.code}', details={self.details})"


class SigningErrorCodes:
    """Standard error codes for signing operations"""

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"

    # Request errors
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_URL = "INVALID_URL"
    INVALID_METHOD = "INVALID_METHOD"
    INVALID_HEADERS = "INVALID_HEADERS"
    INVALID_PARAMS = "INVALID_PARAMS"

    # Option errors
    INVALID_OPTIONS = "INVALID_OPTIONS"


# Type aliases for convenience
TimestampGenerator = Callable[[], str]
QueryParams = List[Tuple[str, str]]
