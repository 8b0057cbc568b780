"""
BCE Auth Python SDK - Request Signing Module

BCE-Auth-V1 request signing with HMAC-SHA256. This module provides the
canonicalization rules, the signer and the HTTP client integration used to
authenticate requests against Baidu Cloud (BCE) API endpoints.
"""

from .types import (
    BceCredential,
    RequestInfo,
    SigningOptions,
    SignatureContext,
    SigningConfig,
    SigningError,
    SigningErrorCodes,
    AUTH_VERSION,
    DEFAULT_EXPIRE_IN_SECONDS,
    DEFAULT_HEADERS_TO_SIGN,
)

from .bce_signer import (
    BceV1Signer,
    create_signer,
    authorize_request,
)

from .canonical_request import (
    canonicalize_params,
    canonicalize_headers,
    build_canonical_request,
)

from .signing_config import (
    SigningConfigBuilder,
    create_signing_config,
    validate_signing_config,
    load_config_from_env,
    load_config_from_file,
)

from .utils import (
    normalize,
    hex_hmac_sha256,
    generate_timestamp,
    split_url,
)

from .integration import (
    BceAuth,
    sign_prepared_request,
    create_signing_session,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'BceV1Signer',
    'create_signer',
    'authorize_request',
    # Types
    'BceCredential',
    'RequestInfo',
    'SigningOptions',
    'SignatureContext',
    'SigningConfig',
    'SigningError',
    'SigningErrorCodes',
    'AUTH_VERSION',
    'DEFAULT_EXPIRE_IN_SECONDS',
    'DEFAULT_HEADERS_TO_SIGN',
    # Canonicalization
    'canonicalize_params',
    'canonicalize_headers',
    'build_canonical_request',
    # Configuration
    'SigningConfigBuilder',
    'create_signing_config',
    'validate_signing_config',
    'load_config_from_env',
    'load_config_from_file',
    # Utilities
    'normalize',
    'hex_hmac_sha256',
    'generate_timestamp',
    'split_url',
    # HTTP Integration
    'BceAuth',
    'sign_prepared_request',
    'create_signing_session',
]
