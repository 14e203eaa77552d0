"""設定ファイル読み込み"""

from __future__ import annotations

import copy
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError, ConfigErrorCodes
from .merger import deep_merge, set_path
from .models import AppConfig

# 環境変数名 -> 設定のドット区切りパス
ENV_OVERRIDES: dict[str, str] = {
    "DAILY_WRITE_LIMIT": "quota.daily_write_limit",
    "DAILY_JOIN_CREATE_LIMIT_PER_ACTOR": "actor_limit.daily_join_create_limit_per_actor",
    "APP_ORIGIN": "cors.app_origin",
    "QUOTA_GATE_URL": "quota.gate_url",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            path=path,
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            path=path,
            cause=e,
        ) from e
    return data


def apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """ENV_OVERRIDES を適用した data のコピーを返す。

    値は文字列のまま設定し、型変換は pydantic の検証に任せる。
    空の環境変数は無視する。
    """
    result = copy.deepcopy(data)
    for env_name, key_path in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            set_path(result, key_path, value)
    return result


def load(
    base_path: Path,
    env_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """設定ファイルを読み込んで AppConfig を返す。

    base_path: ベース設定ファイルのパス（必須）
    env_path: 環境別設定ファイルのパス（存在する場合にベースへマージ）
    environ: ENV_OVERRIDES の参照元。省略時は ``os.environ``
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    data = apply_env_overrides(data, os.environ if environ is None else environ)
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
