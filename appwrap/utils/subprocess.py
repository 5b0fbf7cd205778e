import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional

from appwrap.errors import AppwrapError

logger = logging.getLogger(__name__)


class SubprocessError(AppwrapError):
    exit_code = 13

    def __init__(self, message: str, *, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


def run_command(
    command: List[str],
    *,
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external tool to completion, capturing its output.

    There is no timeout: a hanging tool hangs the caller.
    """

    logger.debug("Running: %s", shlex.join(command))

    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            env=dict(env) if env is not None else None,
            check=False,  # handled manually
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise SubprocessError(
            f"Command not found: {command[0]}"
        ) from exc
    except OSError as exc:
        raise SubprocessError(
            f"Failed to execute command: {shlex.join(command)}"
        ) from exc

    if result.stdout:
        logger.debug("%s stdout:\n%s", Path(command[0]).name, result.stdout.rstrip())

    if check and result.returncode != 0:
        raise SubprocessError(
            _format_error(command, result),
            returncode=result.returncode,
        )

    return result


def _format_error(
    command: List[str],
    result: subprocess.CompletedProcess,
) -> str:
    message = [
        f"Command failed: {shlex.join(command)}",
        f"Exit code: {result.returncode}",
    ]

    if result.stdout:
        message.append(f"stdout:\n{result.stdout.strip()}")

    if result.stderr:
        message.append(f"stderr:\n{result.stderr.strip()}")

    return "\n".join(message)
