import os
from typing import Mapping
import yaml
from slugify import slugify as _slugify


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


CONFIG_SECTIONS = ("naming", "report")


def load_config(path: str = "config.yml") -> dict:
    cfg = load_yaml(path) if os.path.exists(path) else {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: ожидается словарь верхнего уровня")
    for key in CONFIG_SECTIONS:
        if cfg.get(key) is not None and not isinstance(cfg[key], dict):
            raise ValueError(f"{path}: секция {key} должна быть словарём")
    return cfg


def coalesce(*args):
    for a in args:
        if a is not None and a != "":
            return a
    return None


def env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    val = env.get(key)
    if val is None or val.strip() == "":
        return default
    return val.strip().lower() == "true"


def apply_replace_map(s: str, replace_map: dict) -> str:
    out = s
    for k, v in (replace_map or {}).items():
        out = out.replace(k, v)
    return out


def make_alias(name: str, cfg_naming: dict) -> str:
    """Repository alias (URL path segment) from a display name."""
    s = name or ""
    s = apply_replace_map(s, cfg_naming.get("replace_map", {}))
    if cfg_naming.get("slugify", True):
        s = _slugify(s, allow_unicode=cfg_naming.get("transliterate_ru", True))
    if cfg_naming.get("lowercase", True):
        s = s.lower()
    return s
