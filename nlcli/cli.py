# nlcli/cli.py
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .providers.openai_client import OpenAIResolver
from .resolver.resolver import CommandResolver
from .session.session import Session
from .shell.executor import run_shell_command
from .utils.config import load_config
from .utils.env import load_env
from .utils.log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nlcli",
        description="Convert natural language instructions to bash commands",
    )
    p.add_argument("-i", "--instruction", help="natural language instruction to convert")
    p.add_argument("-d", "--dry", action="store_true", help="show commands without executing them")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    p.add_argument("--model", help="override the configured OpenAI model")
    return p


def _build_session(args: argparse.Namespace) -> Session:
    # Hydrate env from ~/.nlcli/.env (does not overwrite existing real env)
    load_env()
    cfg = load_config()

    log_cfg = cfg.get("logging", {}) or {}
    configure_logging("DEBUG" if args.verbose else log_cfg.get("level", "WARNING"), log_cfg.get("file"))

    if args.model:
        cfg["openai"]["model"] = args.model
    ai = OpenAIResolver.from_config(cfg)

    shell = (cfg.get("shell", {}) or {}).get("path") or "sh"
    return Session(
        CommandResolver(ai),
        executor=lambda command: run_shell_command(command, shell=shell),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        session = _build_session(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session.run(instruction=args.instruction, dry=args.dry)
    return 0
