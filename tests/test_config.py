"""
Test suite for signing configuration

This module tests the configuration builder, validation and the loaders for
environment variables and JSON files.
"""

import json

import pytest

from bce_auth.exceptions import BceSDKError, ConfigurationError
from bce_auth.signing import (
    BceCredential,
    SigningConfig,
    SigningError,
    SigningErrorCodes,
    DEFAULT_HEADERS_TO_SIGN,
    create_signing_config,
    validate_signing_config,
    load_config_from_env,
    load_config_from_file,
)


class TestSigningConfigBuilder:
    """Test signing configuration builder"""

    def test_defaults(self):
        config = create_signing_config().access_key("AK").secret_key("SK").build()

        assert config.credential == BceCredential("AK", "SK")
        assert config.header_names_to_sign == DEFAULT_HEADERS_TO_SIGN
        assert config.expire_in_seconds == 1800
        assert config.timestamp_generator is None
        assert config.log_canonical_request is False

    def test_fluent_options(self):
        generator = lambda: "2015-04-27T08:23:49Z"  # noqa: E731
        config = (create_signing_config()
                  .credential(BceCredential("AK", "SK"))
                  .headers(["Host", "Content-MD5"])
                  .add_header("Content-Type")
                  .add_header("host")
                  .expire_in_seconds(600)
                  .timestamp_generator(generator)
                  .log_canonical_request()
                  .build())

        assert config.header_names_to_sign == ["host", "content-md5", "content-type"]
        assert config.expire_in_seconds == 600
        assert config.timestamp_generator is generator
        assert config.log_canonical_request is True

    def test_builder_does_not_share_defaults(self):
        first = create_signing_config().access_key("AK").secret_key("SK").add_header("x-custom").build()
        second = create_signing_config().access_key("AK").secret_key("SK").build()

        assert "x-custom" in first.header_names_to_sign
        assert "x-custom" not in second.header_names_to_sign
        assert "x-custom" not in DEFAULT_HEADERS_TO_SIGN

    def test_missing_keys(self):
        with pytest.raises(SigningError) as exc_info:
            create_signing_config().secret_key("SK").build()
        assert exc_info.value.code == SigningErrorCodes.INVALID_CONFIG

        with pytest.raises(SigningError) as exc_info:
            create_signing_config().access_key("AK").build()
        assert exc_info.value.code == SigningErrorCodes.INVALID_CONFIG

    def test_invalid_credential(self):
        with pytest.raises(SigningError) as exc_info:
            create_signing_config().access_key("AK").secret_key("").build()
        assert exc_info.value.code == SigningErrorCodes.INVALID_CREDENTIAL

    def test_invalid_expire(self):
        for expire in (0, -1, "1800", 1.5, True):
            with pytest.raises(SigningError):
                create_signing_config().access_key("AK").secret_key("SK").expire_in_seconds(expire).build()

    def test_options_for(self):
        config = create_signing_config().access_key("AK").secret_key("SK").expire_in_seconds(60).build()
        options = config.options_for("2015-04-27T08:23:49Z")

        assert options.timestamp == "2015-04-27T08:23:49Z"
        assert options.expire_in_seconds == 60
        assert options.header_names_to_sign == DEFAULT_HEADERS_TO_SIGN
        assert options.header_names_to_sign is not config.header_names_to_sign


class TestValidateSigningConfig:
    """Test configuration validation"""

    def test_rejects_wrong_type(self):
        with pytest.raises(SigningError):
            validate_signing_config({"access_key": "AK"})

    def test_rejects_bad_headers(self):
        config = SigningConfig(credential=BceCredential("AK", "SK"))
        config.header_names_to_sign = ["host", ""]

        with pytest.raises(SigningError):
            validate_signing_config(config)

    def test_signing_config_model_validation(self):
        with pytest.raises(ValueError):
            SigningConfig(credential=("AK", "SK"))

        with pytest.raises(ValueError):
            SigningConfig(credential=BceCredential("AK", "SK"), header_names_to_sign="host")


class TestLoadConfigFromEnv:
    """Test environment variable loading"""

    def test_load(self):
        environ = {
            "BCE_ACCESS_KEY_ID": "AK",
            "BCE_SECRET_ACCESS_KEY": "SK",
            "BCE_EXPIRE_IN_SECONDS": "3600",
            "BCE_HEADERS_TO_SIGN": "Host, Content-Type,,",
        }
        config = load_config_from_env(environ)

        assert config.credential == BceCredential("AK", "SK")
        assert config.expire_in_seconds == 3600
        assert config.header_names_to_sign == ["host", "content-type"]

    def test_defaults(self):
        config = load_config_from_env({"BCE_ACCESS_KEY_ID": "AK", "BCE_SECRET_ACCESS_KEY": "SK"})

        assert config.expire_in_seconds == 1800
        assert config.header_names_to_sign == DEFAULT_HEADERS_TO_SIGN

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("BCE_ACCESS_KEY_ID", "ENV_AK")
        monkeypatch.setenv("BCE_SECRET_ACCESS_KEY", "ENV_SK")

        config = load_config_from_env()
        assert config.credential.access_key == "ENV_AK"

    def test_missing_credentials(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_env({"BCE_ACCESS_KEY_ID": "AK"})

        assert exc_info.value.error_code == "MISSING_CREDENTIALS"
        assert exc_info.value.details["missing"] == ["BCE_SECRET_ACCESS_KEY"]
        assert isinstance(exc_info.value, BceSDKError)

    def test_invalid_expire(self):
        base = {"BCE_ACCESS_KEY_ID": "AK", "BCE_SECRET_ACCESS_KEY": "SK"}

        with pytest.raises(ConfigurationError):
            load_config_from_env({**base, "BCE_EXPIRE_IN_SECONDS": "soon"})

        with pytest.raises(ConfigurationError):
            load_config_from_env({**base, "BCE_EXPIRE_IN_SECONDS": "-5"})


class TestLoadConfigFromFile:
    """Test JSON file loading"""

    def test_load(self, tmp_path):
        path = tmp_path / "bce.json"
        path.write_text(json.dumps({
            "access_key_id": "AK",
            "secret_access_key": "SK",
            "expire_in_seconds": 900,
            "headers_to_sign": ["host"],
        }), encoding="utf-8")

        config = load_config_from_file(path)

        assert config.credential == BceCredential("AK", "SK")
        assert config.expire_in_seconds == 900
        assert config.header_names_to_sign == ["host"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_file(tmp_path / "missing.json")
        assert exc_info.value.error_code == "FILE_NOT_FOUND"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bce.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_file(str(path))
        assert exc_info.value.error_code == "INVALID_JSON"

    def test_missing_keys(self, tmp_path):
        path = tmp_path / "bce.json"
        path.write_text(json.dumps({"access_key_id": "AK"}), encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_file(path)
        assert exc_info.value.details["missing"] == ["secret_access_key"]

    def test_invalid_headers(self, tmp_path):
        path = tmp_path / "bce.json"
        path.write_text(json.dumps({
            "access_key_id": "AK",
            "secret_access_key": "SK",
            "headers_to_sign": "host",
        }), encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config_from_file(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "bce.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config_from_file(path)
