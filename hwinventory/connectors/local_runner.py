# hwinventory/connectors/local_runner.py
"""
Runs diagnostic tools and reads files on the local machine.
"""

import logging
import subprocess
import time
from pathlib import Path

from .command_result import CommandResult, format_command

# Exit code reported when the executable does not exist, as a shell would
COMMAND_NOT_FOUND = 127


class LocalRunner:
    """
    Executes commands on the local host.

    Shares its interface (run, read_file, connect, disconnect) with
    SSHConnector so sub-collectors do not care where they run.
    """

    def __init__(self, timeout: int = 30, use_sudo: bool = False):
        self.timeout = timeout
        self.use_sudo = use_sudo
        self.host = 'localhost'
        self.logger = logging.getLogger('runner.local')

    def connect(self) -> bool:
        return True

    def disconnect(self):
        pass

    def run(self, name: str, *args: str, timeout: int = None) -> CommandResult:
        """
        Run an executable with arguments and capture its output.

        Never raises for a failing command: the exit code is returned in the
        result and interpreted by the caller.
        """
        argv = [name, *args]
        if self.use_sudo:
            argv = ['sudo', '-n', *argv]
        command = format_command(argv)

        if timeout is None:
            timeout = self.timeout

        self.logger.debug(f"Executing: {command}")
        start_time = time.time()

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors='replace',
                timeout=timeout
            )
        except FileNotFoundError:
            execution_time = time.time() - start_time
            self.logger.debug(f"Command not found: {name}")
            return CommandResult(False, error=f"{name}: command not found", exit_code=COMMAND_NOT_FOUND,
                                 execution_time=execution_time, command=command)
        except subprocess.TimeoutExpired:
            execution_time = time.time() - start_time
            error_msg = f"Command '{command}' timed out after {execution_time:.2f}s (timeout: {timeout}s)"
            self.logger.error(error_msg)
            return CommandResult(False, error=error_msg, exit_code=-1,
                                 execution_time=execution_time, command=command)

        execution_time = time.time() - start_time
        success = completed.returncode == 0

        if success:
            self.logger.debug(f"Command '{command}' completed successfully in {execution_time:.2f}s")
        else:
            self.logger.debug(f"Command '{command}' exited with {completed.returncode}")

        return CommandResult(
            success=success,
            output=completed.stdout or "",
            error=completed.stderr or "",
            exit_code=completed.returncode,
            execution_time=execution_time,
            command=command
        )

    def read_file(self, file_path: str) -> CommandResult:
        """Read a local file into a CommandResult"""
        command = f"read {file_path}"
        try:
            content = Path(file_path).read_text(errors='replace')
        except OSError as e:
            self.logger.debug(f"Failed to read {file_path}: {e}")
            return CommandResult(False, error=str(e), exit_code=1, command=command)
        return CommandResult(True, output=content, command=command)
