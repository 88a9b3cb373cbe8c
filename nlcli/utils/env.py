import os
import pathlib
from typing import Dict


def load_env(path: str = "~/.nlcli/.env") -> Dict[str, str]:
    """
    Read KEY=VALUE pairs from a dotenv-style file and return them as a dict.

    Each pair is copied into ``os.environ`` only when the variable is not
    already set, so values exported in the shell take precedence. Comments,
    blank lines and lines without '=' are skipped. An ``export `` prefix and one
    pair of matching quotes around the value are removed. A missing file
    yields an empty dict.
    """
    p = pathlib.Path(os.path.expanduser(path))
    if not p.exists():
        return {}

    env: Dict[str, str] = {}
    for raw in p.read_text(encoding="utf-8", errors="ignore").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        k, v = line.split("=", 1)
        k, v = k.strip(), v.strip()
        if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):
            v = v[1:-1]
        env[k] = v
        # real env wins
        os.environ.setdefault(k, v)
    return env
