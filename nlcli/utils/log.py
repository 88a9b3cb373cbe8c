from __future__ import annotations

import logging
import os
from typing import Optional


def configure_logging(level: str | int = "WARNING", log_file: Optional[str] = None) -> None:
    """Configure stderr logging and an optional file log for the nlcli loggers."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = os.path.expanduser(log_file)
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        # file handler wants everything the root lets through
        root_logger.setLevel(min(level, logging.DEBUG))

    # keep the SDK's request chatter out of the terminal
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    logging.getLogger("openai").setLevel(max(level, logging.WARNING))
