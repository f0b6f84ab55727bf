"""subprocess-backed CommandRunner."""

import logging
import subprocess
from typing import Optional, Sequence

from timemach.config import COMMAND_TIMEOUT
from timemach.errors import CommandFailed
from timemach.toolchain.base import CommandResult, CommandRunner

logger = logging.getLogger("timemach-toolchain")


class SubprocessRunner(CommandRunner):
    """Runs toolchain commands with subprocess.run, capturing text output."""

    def __init__(self, timeout: Optional[float] = COMMAND_TIMEOUT):
        self.timeout = timeout

    def run(self, command: str, args: Sequence[str] = ()) -> CommandResult:
        argv = [command, *args]
        logger.debug(f"Running: {' '.join(argv)}")
        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise CommandFailed(argv, f"timed out after {self.timeout}s")
        except OSError as e:
            raise CommandFailed(argv, str(e))

        if proc.returncode != 0:
            logger.debug(f"{command} exited {proc.returncode}: {proc.stderr.strip()}")
        return CommandResult(
            command=argv,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
