"""Config model unit tests."""

import pytest
from pydantic import ValidationError
from renrakun_config.models import AppConfig, AppSection, QuotaSection, ServerSection


def test_app_section_missing_name() -> None:
    with pytest.raises(ValidationError):
        AppSection.model_validate({})  # type: ignore[call-arg]


def test_server_section_invalid_port() -> None:
    with pytest.raises(ValidationError):
        ServerSection(port=0)
    with pytest.raises(ValidationError):
        ServerSection(port=65536)


def test_quota_section_defaults() -> None:
    section = QuotaSection()
    assert section.daily_write_limit == 300
    assert section.timezone == "Asia/Tokyo"
    assert section.instance_name == "global"
    assert section.timeout_seconds == 5.0


def test_quota_section_rejects_non_positive_limit() -> None:
    with pytest.raises(ValidationError):
        QuotaSection(daily_write_limit=0)


def test_app_config_minimal() -> None:
    config = AppConfig(app=AppSection(name="renrakun-api"))
    assert config.actor_limit.daily_join_create_limit_per_actor == 40
    assert config.cors.app_origin == "*"
    assert config.observability.log.format == "json"


def test_app_config_full() -> None:
    data = {
        "app": {"name": "renrakun-quota-gate", "version": "1.0.0"},
        "server": {"port": 8787},
        "quota": {"daily_write_limit": 100, "timezone": "UTC"},
        "storage": {"path": ":memory:"},
    }
    config = AppConfig.model_validate(data)
    assert config.server.port == 8787
    assert config.quota.daily_write_limit == 100
    assert config.storage.path == ":memory:"
