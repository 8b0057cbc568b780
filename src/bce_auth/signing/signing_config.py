"""
Configuration management for request signing

This module provides configuration management for BCE-Auth-V1 signing,
including a fluent configuration builder, loaders for environment variables
and JSON files, and validation.
"""

import json
import os
from pathlib import Path
from typing import List, Mapping, Optional, Union

from ..exceptions import ConfigurationError
from .types import (
    BceCredential,
    SigningConfig,
    SigningError,
    SigningErrorCodes,
    TimestampGenerator,
    DEFAULT_EXPIRE_IN_SECONDS,
    DEFAULT_HEADERS_TO_SIGN,
)

ENV_ACCESS_KEY = 'BCE_ACCESS_KEY_ID'
ENV_SECRET_KEY = 'BCE_SECRET_ACCESS_KEY'
ENV_EXPIRE_IN_SECONDS = 'BCE_EXPIRE_IN_SECONDS'
ENV_HEADERS_TO_SIGN = 'BCE_HEADERS_TO_SIGN'


class SigningConfigBuilder:
    """
    Builder for creating signing configurations with fluent API
    """

    def __init__(self):
        self._access_key: Optional[str] = None
        self._secret_key: Optional[str] = None
        self._headers: List[str] = list(DEFAULT_HEADERS_TO_SIGN)
        self._expire_in_seconds: int = DEFAULT_EXPIRE_IN_SECONDS
        self._timestamp_generator: Optional[TimestampGenerator] = None
        self._log_canonical_request: bool = False

    def access_key(self, access_key: str) -> 'SigningConfigBuilder':
        """
        Set access key.

        Args:
            access_key: Access key identifier (AK)

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._access_key = access_key
        return self

    def secret_key(self, secret_key: str) -> 'SigningConfigBuilder':
        """
        Set secret key.

        Args:
            secret_key: Secret access key (SK)

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._secret_key = secret_key
        return self

    def credential(self, credential: BceCredential) -> 'SigningConfigBuilder':
        """
        Set both keys from an existing credential.

        Args:
            credential: Access key / secret key pair

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._access_key = credential.access_key
        self._secret_key = credential.secret_key
        return self

    def headers(self, headers: List[str]) -> 'SigningConfigBuilder':
        """
        Set headers to include in signature.

        Args:
            headers: List of header names to include

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._headers = [h.lower() for h in headers]
        return self

    def add_header(self, header: str) -> 'SigningConfigBuilder':
        """
        Add header to the signed header names.

        Args:
            header: Header name to add

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        header_lower = header.lower()
        if header_lower not in self._headers:
            self._headers.append(header_lower)

        return self

    def expire_in_seconds(self, expire_in_seconds: int) -> 'SigningConfigBuilder':
        """
        Set token validity.

        Args:
            expire_in_seconds: Validity in seconds, must be positive

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._expire_in_seconds = expire_in_seconds
        return self

    def timestamp_generator(self, generator: TimestampGenerator) -> 'SigningConfigBuilder':
        """
        Set custom timestamp generator.

        Args:
            generator: Function that returns x-bce-date strings

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._timestamp_generator = generator
        return self

    def log_canonical_request(self, enabled: bool = True) -> 'SigningConfigBuilder':
        self._log_canonical_request = enabled
        return self

    def build(self) -> SigningConfig:
        """
        Build the signing configuration.

        Returns:
            SigningConfig: Complete signing configuration

        Raises:
            SigningError: If configuration is invalid
        """
        if self._access_key is None:
            raise SigningError(
                "Access key is required",
                SigningErrorCodes.INVALID_CONFIG
            )

        if self._secret_key is None:
            raise SigningError(
                "Secret key is required",
                SigningErrorCodes.INVALID_CONFIG
            )

        try:
            credential = BceCredential(self._access_key, self._secret_key)
        except ValueError as e:
            raise SigningError(
                f"Invalid credential: {e}",
                SigningErrorCodes.INVALID_CREDENTIAL
            )

        config = SigningConfig(
            credential=credential,
            header_names_to_sign=list(self._headers),
            expire_in_seconds=self._expire_in_seconds,
            timestamp_generator=self._timestamp_generator,
            log_canonical_request=self._log_canonical_request
        )
        validate_signing_config(config)
        return config


def create_signing_config() -> SigningConfigBuilder:
    """
    Create a new signing configuration builder.

    Returns:
        SigningConfigBuilder: New configuration builder
    """
    return SigningConfigBuilder()


def validate_signing_config(config: SigningConfig) -> None:
    """
    Validate signing configuration.

    Args:
        config: Signing configuration to validate

    Raises:
        SigningError: If configuration is invalid
    """
    if not isinstance(config, SigningConfig):
        raise SigningError(
            "Configuration must be SigningConfig instance",
            SigningErrorCodes.INVALID_CONFIG
        )

    if not isinstance(config.credential, BceCredential):
        raise SigningError(
            "Credential must be BceCredential instance",
            SigningErrorCodes.INVALID_CREDENTIAL
        )

    expire = config.expire_in_seconds
    if not isinstance(expire, int) or isinstance(expire, bool) or expire <= 0:
        raise SigningError(
            f"Expire in seconds must be a positive integer: {expire!r}",
            SigningErrorCodes.INVALID_CONFIG,
            {"expire_in_seconds": expire}
        )

    if not isinstance(config.header_names_to_sign, list) or \
       not all(isinstance(h, str) and h for h in config.header_names_to_sign):
        raise SigningError(
            "Header names to sign must be a list of non-empty strings",
            SigningErrorCodes.INVALID_CONFIG,
            {"header_names_to_sign": config.header_names_to_sign}
        )


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> SigningConfig:
    """
    Load signing configuration from environment variables.

    Reads BCE_ACCESS_KEY_ID, BCE_SECRET_ACCESS_KEY and the optional
    BCE_EXPIRE_IN_SECONDS and BCE_HEADERS_TO_SIGN (comma separated).

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        SigningConfig: Loaded configuration

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    if environ is None:
        environ = os.environ

    access_key = environ.get(ENV_ACCESS_KEY)
    secret_key = environ.get(ENV_SECRET_KEY)
    missing = [name for name, value in ((ENV_ACCESS_KEY, access_key), (ENV_SECRET_KEY, secret_key)) if not value]
    if missing:
        raise ConfigurationError(
            f"Missing environment variables: {', '.join(missing)}",
            "MISSING_CREDENTIALS",
            {"missing": missing}
        )

    builder = create_signing_config().access_key(access_key).secret_key(secret_key)

    raw_expire = environ.get(ENV_EXPIRE_IN_SECONDS)
    if raw_expire:
        try:
            builder.expire_in_seconds(int(raw_expire))
        except ValueError:
            raise ConfigurationError(
                f"{ENV_EXPIRE_IN_SECONDS} must be an integer, got {raw_expire!r}",
                "INVALID_EXPIRE"
            )

    raw_headers = environ.get(ENV_HEADERS_TO_SIGN)
    if raw_headers:
        builder.headers([h.strip() for h in raw_headers.split(',') if h.strip()])

    return _build_or_raise(builder)


def load_config_from_file(path: Union[str, Path]) -> SigningConfig:
    """
    Load signing configuration from a JSON file.

    The document holds ``access_key_id`` and ``secret_access_key`` and
    optionally ``expire_in_seconds`` and ``headers_to_sign``.

    Args:
        path: Path to the JSON file

    Returns:
        SigningConfig: Loaded configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or incomplete
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            "FILE_NOT_FOUND",
            {"path": str(config_path)}
        )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file: {e}",
            "INVALID_JSON",
            {"path": str(config_path)}
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a JSON object",
            "INVALID_FORMAT",
            {"path": str(config_path)}
        )

    missing = [key for key in ('access_key_id', 'secret_access_key') if not data.get(key)]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration keys: {', '.join(missing)}",
            "MISSING_CREDENTIALS",
            {"path": str(config_path), "missing": missing}
        )

    builder = (create_signing_config()
               .access_key(data['access_key_id'])
               .secret_key(data['secret_access_key']))

    if 'expire_in_seconds' in data:
        builder.expire_in_seconds(data['expire_in_seconds'])

    if 'headers_to_sign' in data:
        headers = data['headers_to_sign']
        if not isinstance(headers, list) or not all(isinstance(h, str) for h in headers):
            raise ConfigurationError(
                "headers_to_sign must be a list of strings",
                "INVALID_FORMAT",
                {"path": str(config_path)}
            )
        builder.headers(headers)

    return _build_or_raise(builder)


def _build_or_raise(builder: SigningConfigBuilder) -> SigningConfig:
    try:
        return builder.build()
    except SigningError as e:
        raise ConfigurationError(e.message, e.code, e.details)
