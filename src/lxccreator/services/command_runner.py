"""Child process execution for lxc-creator."""

import subprocess
from typing import List, Optional

from lxccreator.errors import CommandTimeout, ExternalCommandFailed
from lxccreator.errors_catalog import actionable_error


class CommandRunner:
    """Runs external commands as argument lists with a timeout and consistent errors."""

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        timeout: Optional[float] = None,
        stdin_path: Optional[str] = None,
        display: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = display or " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        effective_timeout = timeout if timeout is not None else self.default_timeout

        stdin_file = None
        try:
            if stdin_path is not None:
                stdin_file = open(stdin_path, "r", encoding="utf-8")
            result = subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                timeout=effective_timeout,
                stdin=stdin_file,
            )
        except FileNotFoundError as exc:
            if stdin_path is not None and stdin_file is None:
                raise ExternalCommandFailed(f"Input file missing for {cmd_str}: {stdin_path}") from exc
            raise ExternalCommandFailed(actionable_error("command_not_found", command=cmd[0])) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandTimeout(
                actionable_error("command_timeout", timeout=effective_timeout, command=cmd_str)
            ) from exc
        except OSError as exc:
            raise ExternalCommandFailed(f"Failed to execute command: {cmd_str}. {exc}") from exc
        finally:
            if stdin_file is not None:
                stdin_file.close()

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = actionable_error("command_failed", returncode=result.returncode, command=cmd_str)
        if stderr:
            message = f"{message}\n{stderr}"

        if check:
            raise ExternalCommandFailed(message, returncode=result.returncode)

        self.logger.warning(message)
        return result
