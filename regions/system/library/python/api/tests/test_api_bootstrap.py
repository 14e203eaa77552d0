"""build_components / build_app tests."""

from renrakun_api import build_app, build_components
from renrakun_config import AppConfig


def make_config(tmp_path) -> AppConfig:
    return AppConfig.model_validate(
        {
            "app": {"name": "renrakun-api"},
            "quota": {
                "daily_write_limit": 120,
                "gate_url": "http://quota-gate:8787",
                "timeout_seconds": 2.5,
                "reset_max_attempts": 3,
            },
            "actor_limit": {
                "daily_join_create_limit_per_actor": 0,
                "database_path": str(tmp_path / "actors.sqlite3"),
            },
            "cors": {"app_origin": "https://renrakun.example"},
        }
    )


def test_build_components(tmp_path) -> None:
    components = build_components(make_config(tmp_path))
    assert components.quota.limit == 120
    assert str(components.quota.timezone) == "Asia/Tokyo"
    assert components.actor_limiter.enabled is False
    assert (tmp_path / "actors.sqlite3").exists()


def test_build_app(tmp_path) -> None:
    app = build_app(make_config(tmp_path))
    paths = {route.path for route in app.routes}
    assert {"/", "/api/quota/status"} <= paths
    assert app.state.quota.limit == 120
