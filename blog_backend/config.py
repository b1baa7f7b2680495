from __future__ import annotations

# blog_backend/config.py
import os
import logging
from typing import Any

import yaml

# 配置文件查找顺序：
# 1) 环境变量 BLOG_CONFIG_PATH
# 2) 当前工作目录下的 config.yaml
# 3) 项目根 config.yaml
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULTS: dict[str, Any] = {
    "db_path": None,
    "test_db_path": None,
    "page_size": 10,
    "log_level": "INFO",
}

logger = logging.getLogger(__name__)


def config_path() -> str | None:
    env_path = os.environ.get("BLOG_CONFIG_PATH")
    if env_path:
        return env_path
    for base in (os.getcwd(), PROJECT_ROOT):
        p = os.path.join(base, "config.yaml")
        if os.path.exists(p):
            return p
    return None


def _read_config_yaml(path: str | None) -> dict:
    if not path or not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
        return {}
    return cfg if isinstance(cfg, dict) else {}


def read_config(path: str | None = None) -> dict:
    """
    Load config.yaml and coerce known keys; unknown keys are dropped.
    Missing or malformed values fall back to DEFAULTS.
    """
    raw = _read_config_yaml(path or config_path())
    out = dict(DEFAULTS)
    for k in ("db_path", "test_db_path"):
        v = raw.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    try:
        size = int(raw.get("page_size", DEFAULTS["page_size"]))
        if size > 0:
            out["page_size"] = size
    except (TypeError, ValueError):
        pass
    level = raw.get("log_level")
    if isinstance(level, str) and level.strip():
        out["log_level"] = level.strip().upper()
    return out
