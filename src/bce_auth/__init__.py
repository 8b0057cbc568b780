"""
BCE Auth Python SDK
BCE-Auth-V1 request signing for Baidu Cloud API clients
"""

from .version import __version__
from .exceptions import (
    BceSDKError,
    ConfigurationError,
)
from .signing import (
    BceV1Signer,
    BceCredential,
    RequestInfo,
    SigningOptions,
    SignatureContext,
    SigningConfig,
    SigningError,
    SigningErrorCodes,
    create_signer,
    authorize_request,
    create_signing_config,
    load_config_from_env,
    load_config_from_file,
    normalize,
    generate_timestamp,
    BceAuth,
    sign_prepared_request,
    create_signing_session,
)

__all__ = [
    '__version__',
    # Exceptions
    'BceSDKError',
    'ConfigurationError',
    # Signing
    'BceV1Signer',
    'BceCredential',
    'RequestInfo',
    'SigningOptions',
    'SignatureContext',
    'SigningConfig',
    'SigningError',
    'SigningErrorCodes',
    'create_signer',
    'authorize_request',
    'create_signing_config',
    'load_config_from_env',
    'load_config_from_file',
    'normalize',
    'generate_timestamp',
    # HTTP Integration
    'BceAuth',
    'sign_prepared_request',
    'create_signing_session',
]
