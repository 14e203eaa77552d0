"""YAML ディープマージユーティリティ"""

from __future__ import annotations

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """base と override をディープマージして新しい辞書を返す。

    ネストされた dict は再帰的にマージし、それ以外の値（リストを含む）は
    override の値で置き換える。
    """
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def set_path(data: dict[str, Any], key_path: str, value: Any) -> None:
    """``quota.daily_write_limit`` のようなドット区切りパスに値を設定する。"""
    parts = key_path.split(".")
    node = data
    for part in parts[:-1]:
        if part not in node or not isinstance(node[part], dict):
            node[part] = {}
        node = node[part]
    node[parts[-1]] = value
