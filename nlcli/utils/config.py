import copy
import os
import pathlib
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = "~/.nlcli/config.yaml"

DEFAULT_CFG: Dict[str, Any] = {
    "openai": {
        "model": "gpt-3.5-turbo",
        "max_tokens": 800,
        "temperature": 0.3,
        "api_key_env": "OPENAI_API_KEY",
    },
    "shell": {"path": "sh"},
    "logging": {"level": "WARNING", "file": None},
}

# env var -> (section, key)
_ENV_OVERRIDES = {
    "NLCLI_OPENAI_MODEL": ("openai", "model"),
    "NLCLI_SHELL": ("shell", "path"),
    "NLCLI_LOG_LEVEL": ("logging", "level"),
}


def _deepmerge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Fill keys missing from ``a`` with the values of ``b``; ``a`` wins on conflicts."""
    for k, v in b.items():
        if k not in a or a[k] is None and isinstance(v, dict):
            a[k] = copy.deepcopy(v)
        elif isinstance(v, dict) and isinstance(a[k], dict):
            a[k] = _deepmerge(a[k], v)
    return a


def _apply_env(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for var, (section, key) in _ENV_OVERRIDES.items():
        val = os.environ.get(var, "").strip()
        if val:
            cfg.setdefault(section, {})[key] = val
    return cfg


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Read the YAML config (``NLCLI_CONFIG`` or ~/.nlcli/config.yaml), merged
    over the defaults. A missing file is created with the defaults.
    """
    p = pathlib.Path(os.path.expanduser(path or os.environ.get("NLCLI_CONFIG") or DEFAULT_CONFIG_PATH))
    if p.exists():
        with p.open("r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        if not isinstance(cfg, dict):
            raise ValueError(f"config file {p} must contain a mapping")
        for section in DEFAULT_CFG:
            if cfg.get(section) is not None and not isinstance(cfg[section], dict):
                raise ValueError(f"config file {p}: '{section}' must be a mapping, got {cfg[section]!r}")
        cfg = _deepmerge(cfg, DEFAULT_CFG)
    else:
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            yaml.safe_dump(DEFAULT_CFG, f, sort_keys=False)
        cfg = copy.deepcopy(DEFAULT_CFG)
    return _apply_env(cfg)
