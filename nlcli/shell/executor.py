from __future__ import annotations

import logging
import subprocess

from ..utils.schema import ExecutionResult

logger = logging.getLogger(__name__)


def run_shell_command(command: str, shell: str = "sh") -> ExecutionResult:
    """
    Hand the whole command string to ``<shell> -c`` so pipes, redirects and
    globs behave as typed. Never raises: a shell that cannot be started, or a
    command Popen refuses outright (an embedded NUL byte), comes back as a
    failed result carrying the launch error.
    """
    logger.debug("running %r under %s", command, shell)
    try:
        proc = subprocess.Popen(
            [shell, "-c", command],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except (OSError, ValueError) as e:
        logger.debug("launch failed: %s", e)
        return ExecutionResult(success=False, error=str(e))

    out, err = proc.communicate()
    logger.debug("exit=%s", proc.returncode)
    return ExecutionResult(
        success=proc.returncode == 0,
        output=(out or "").strip() or None,
        error=(err or "").strip() or None,
    )
