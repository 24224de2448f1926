"""Tests for credentials, environment loading and the client factory."""

from __future__ import annotations

import pytest

from conftest import SANDBOX_URL, RecordingTransport
from payway import (
    ConfigurationError,
    PayWayClient,
    PayWayConfig,
    build_environment,
    create_payway_client,
    load_env_file,
    load_payway_config,
)


def test_base_url_gets_trailing_slash():
    config = PayWayConfig(base_url="https://checkout.payway.com.kh", merchant_id="m", api_key="k")
    assert config.base_url == "https://checkout.payway.com.kh/"
    assert config.endpoint("api/x") == "https://checkout.payway.com.kh/api/x"


@pytest.mark.parametrize("url", ["checkout.payway.com.kh", "ftp://payway.com.kh/", "https://"])
def test_invalid_base_url_is_rejected(url):
    with pytest.raises(ConfigurationError):
        PayWayConfig(base_url=url, merchant_id="m", api_key="k")


@pytest.mark.parametrize(("merchant_id", "api_key"), [("", "k"), ("  ", "k"), ("m", "")])
def test_credentials_must_not_be_empty(merchant_id, api_key):
    with pytest.raises(ConfigurationError):
        PayWayConfig(base_url=SANDBOX_URL, merchant_id=merchant_id, api_key=api_key)


def test_blank_rsa_key_means_no_key():
    config = PayWayConfig(base_url=SANDBOX_URL, merchant_id="m", api_key="k", rsa_public_key=" ")
    assert config.rsa_public_key is None
    assert not config.has_rsa_public_key


def test_repr_hides_secrets():
    config = PayWayConfig(base_url=SANDBOX_URL, merchant_id="m", api_key="super-secret")
    assert "super-secret" not in repr(config)


def test_config_is_immutable(config):
    with pytest.raises(AttributeError):
        config.api_key = "other"  # type: ignore[misc]


def test_from_mapping_applies_defaults():
    config = PayWayConfig.from_mapping({"PAYWAY_MERCHANT_ID": "m1", "PAYWAY_API_KEY": "k1"})
    assert config.base_url == SANDBOX_URL
    assert config.merchant_id == "m1"
    assert config.rsa_public_key is None
    assert config.timeout_seconds == 30.0


@pytest.mark.parametrize("missing", ["PAYWAY_MERCHANT_ID", "PAYWAY_API_KEY"])
def test_from_mapping_requires_credentials(missing):
    values = {"PAYWAY_MERCHANT_ID": "m1", "PAYWAY_API_KEY": "k1"}
    del values[missing]
    with pytest.raises(ConfigurationError, match=missing):
        PayWayConfig.from_mapping(values)


def test_from_mapping_rejects_bad_timeout():
    with pytest.raises(ConfigurationError, match="PAYWAY_TIMEOUT_SECONDS"):
        PayWayConfig.from_mapping(
            {"PAYWAY_MERCHANT_ID": "m1", "PAYWAY_API_KEY": "k1", "PAYWAY_TIMEOUT_SECONDS": "soon"}
        )


def test_rsa_key_can_come_from_file(tmp_path, rsa_public_key_pem):
    key_file = tmp_path / "payway_public.pem"
    key_file.write_text(rsa_public_key_pem, encoding="utf-8")

    config = PayWayConfig.from_mapping(
        {
            "PAYWAY_MERCHANT_ID": "m1",
            "PAYWAY_API_KEY": "k1",
            "PAYWAY_RSA_PUBLIC_KEY_FILE": str(key_file),
        }
    )
    assert config.rsa_public_key == rsa_public_key_pem


def test_missing_rsa_key_file_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError, match="PAYWAY_RSA_PUBLIC_KEY_FILE"):
        PayWayConfig.from_mapping(
            {
                "PAYWAY_MERCHANT_ID": "m1",
                "PAYWAY_API_KEY": "k1",
                "PAYWAY_RSA_PUBLIC_KEY_FILE": str(tmp_path / "missing.pem"),
            }
        )


def test_env_file_parsing(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# PayWay sandbox\n"
        "export PAYWAY_MERCHANT_ID=m1\n"
        'PAYWAY_API_KEY="k1"\n'
        'PAYWAY_RSA_PUBLIC_KEY="-----BEGIN PUBLIC KEY-----\\nABC\\n-----END PUBLIC KEY-----"\n'
        "PAYWAY_RAW='a\\nb'\n"
        "not a setting\n",
        encoding="utf-8",
    )

    environment = build_environment(env_file=str(env_file), base={})

    assert environment.get("PAYWAY_MERCHANT_ID") == "m1"
    assert environment.get("PAYWAY_API_KEY") == "k1"
    assert environment.get("PAYWAY_RSA_PUBLIC_KEY") == (
        "-----BEGIN PUBLIC KEY-----\nABC\n-----END PUBLIC KEY-----"
    )
    assert environment.get("PAYWAY_RAW") == "a\\nb"
    assert environment.get("not a setting") is None


def test_unquoted_values_keep_backslashes(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "PAYWAY_RSA_PUBLIC_KEY_FILE=C:\\new\\key.pem\n"
        'PAYWAY_QUOTED="C:\\new"\n',
        encoding="utf-8",
    )

    environment = build_environment(env_file=str(env_file), base={})

    assert environment.get("PAYWAY_RSA_PUBLIC_KEY_FILE") == "C:\\new\\key.pem"
    assert environment.get("PAYWAY_QUOTED") == "C:\new"


def test_environment_layering(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PAYWAY_MERCHANT_ID=from-file\nPAYWAY_API_KEY=file-key\n", encoding="utf-8")

    environment = build_environment(
        env_file=str(env_file),
        base={"PAYWAY_MERCHANT_ID": "from-base"},
        overrides={"PAYWAY_API_KEY": "override-key"},
    )

    assert environment.get("PAYWAY_MERCHANT_ID") == "from-base"
    assert environment.get("PAYWAY_API_KEY") == "override-key"


def test_load_env_file_keeps_existing_keys(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=file\n", encoding="utf-8")
    environ = {"A": "existing"}

    merged = load_env_file(str(env_file), environ=environ)

    assert merged == {"A": "existing", "B": "file"}
    assert environ["B"] == "file"


def test_missing_env_file_is_ignored(tmp_path):
    environment = build_environment(env_file=str(tmp_path / "absent.env"), base={"X": "1"})
    assert dict(environment.variables) == {"X": "1"}


def test_load_payway_config_keyword_arguments_win(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PAYWAY_MERCHANT_ID=m1\nPAYWAY_API_KEY=k1\n", encoding="utf-8")

    config = load_payway_config(
        env_file=str(env_file),
        base={},
        merchant_id="m2",
        timeout_seconds=5,
    )

    assert config.merchant_id == "m2"
    assert config.api_key == "k1"
    assert config.timeout_seconds == 5.0


def test_create_payway_client_from_parameters():
    transport = RecordingTransport()
    client = create_payway_client(
        env_file=None,
        base={},
        base_url="https://checkout.payway.com.kh",
        merchant_id="m1",
        api_key="k1",
        transport=transport,
    )
    assert isinstance(client, PayWayClient)
    assert client.base_url == "https://checkout.payway.com.kh/"
    assert client.transport is transport


def test_create_payway_client_rejects_config_and_parameters(config):
    with pytest.raises(ValueError):
        create_payway_client(config=config, merchant_id="other")
    assert create_payway_client(config=config).config is config
