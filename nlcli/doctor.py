# nlcli/doctor.py
from __future__ import annotations

import os

from .utils.config import load_config
from .utils.env import load_env


def main() -> int:
    load_env()
    cfg = load_config()
    o = cfg.get("openai", {}) or {}
    key_env = o.get("api_key_env", "OPENAI_API_KEY")

    print(f"model={o.get('model', '')}")
    print(f"max_tokens={o.get('max_tokens', '')}")
    print(f"temperature={o.get('temperature', '')}")
    print(f"shell={(cfg.get('shell', {}) or {}).get('path', '')}")
    print(f"log_level={(cfg.get('logging', {}) or {}).get('level', '')}")
    print(f"{key_env} set? {'yes' if os.getenv(key_env) else 'no (pattern matching only)'}")
    return 0
