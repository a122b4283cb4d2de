# hwinventory/connectors/ssh_connector.py
"""
SSH connector for running diagnostic tools on a remote host.
Offers the same run/read_file interface as LocalRunner.
"""

import logging
import shlex
import socket
import time
from pathlib import Path

import paramiko

from .command_result import CommandResult, format_command


class SSHConnector:
    """
    Executes commands on a remote system over SSH.
    Supports key-based and password authentication.
    """

    def __init__(self, host: str, port: int = 22, username: str = 'root',
                 password: str = None, ssh_key_path: str = None, timeout: int = 30,
                 use_sudo: bool = False):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.ssh_key_path = ssh_key_path
        self.timeout = timeout
        self.use_sudo = use_sudo

        self.client = None
        self.logger = logging.getLogger(f'ssh_connector.{host}')

    def connect(self) -> bool:
        """
        Establish SSH connection to the remote host.

        Returns:
            bool: True if connection successful, False otherwise
        """
        try:
            self.client = paramiko.SSHClient()
            self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

            connect_params = {
                'hostname': self.host,
                'port': self.port,
                'username': self.username,
                'timeout': self.timeout
            }

            if self.ssh_key_path:
                key_path = Path(self.ssh_key_path).expanduser()
                if key_path.exists():
                    connect_params['key_filename'] = str(key_path)
                    self.logger.debug(f"Using SSH key: {key_path}")
                else:
                    self.logger.warning(f"SSH key not found: {key_path}")
                    if not self.password:
                        return False

            if self.password:
                connect_params['password'] = self.password

            self.client.connect(**connect_params)
            self.logger.info(f"SSH connection established to {self.host}:{self.port}")
            return True

        except paramiko.AuthenticationException:
            self.logger.error(f"Authentication failed for {self.host}")
        except paramiko.SSHException as e:
            self.logger.error(f"SSH connection failed to {self.host}: {e}")
        except socket.timeout:
            self.logger.error(f"Connection timeout to {self.host}:{self.port}")
        except OSError as e:
            self.logger.error(f"Unable to reach {self.host}:{self.port}: {e}")

        self.client = None
        return False

    def disconnect(self):
        """Close the SSH connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.logger.debug(f"SSH connection closed to {self.host}")

    def execute_command(self, command: str, timeout: int = None) -> CommandResult:
        """
        Execute a shell command line on the remote host.

        Args:
            command: Command to execute
            timeout: Command timeout (uses connection timeout if None)

        Returns:
            CommandResult: Command execution result
        """
        if not self.client:
            return CommandResult(False, error="No SSH connection established", exit_code=-1, command=command)

        if timeout is None:
            timeout = self.timeout

        start_time = time.time()

        try:
            self.logger.debug(f"Executing: {command}")

            stdin, stdout, stderr = self.client.exec_command(command, timeout=timeout, get_pty=False)

            output = stdout.read().decode('utf-8', errors='replace')
            error = stderr.read().decode('utf-8', errors='replace')
            exit_code = stdout.channel.recv_exit_status()

            execution_time = time.time() - start_time

            stdin.close()
            stdout.close()
            stderr.close()

            success = exit_code == 0
            if success:
                self.logger.debug(
                    f"Command '{self._truncate_command(command)}' completed successfully in {execution_time:.2f}s")
            else:
                self.logger.debug(self._format_command_error(command, exit_code, error, execution_time))

            return CommandResult(
                success=success,
                output=output,
                error=error,
                exit_code=exit_code,
                execution_time=execution_time,
                command=command
            )

        except socket.timeout:
            execution_time = time.time() - start_time
            error_msg = (f"Command '{self._truncate_command(command)}' timed out after "
                         f"{execution_time:.2f}s (timeout: {timeout}s)")
            self.logger.error(error_msg)
            return CommandResult(False, error=error_msg, exit_code=-1, execution_time=execution_time, command=command)

        except paramiko.SSHException as e:
            execution_time = time.time() - start_time
            error_msg = f"Command '{self._truncate_command(command)}' execution failed: {e}"
            self.logger.error(error_msg)
            return CommandResult(False, error=error_msg, exit_code=-1, execution_time=execution_time, command=command)

    def run(self, name: str, *args: str, timeout: int = None) -> CommandResult:
        """Run an executable with arguments on the remote host"""
        argv = [name, *args]
        if self.use_sudo:
            argv = ['sudo', '-n', *argv]
        return self.execute_command(format_command(argv), timeout)

    def read_file(self, file_path: str) -> CommandResult:
        """Read content of a remote file"""
        return self.execute_command(f"cat {shlex.quote(file_path)}")

    def _truncate_command(self, command: str, max_length: int = 80) -> str:
        """Truncate command for logging if it's too long"""
        if len(command) <= max_length:
            return command
        return command[:max_length - 3] + "..."

    def _format_command_error(self, command: str, exit_code: int, error: str, execution_time: float) -> str:
        """Format command error message with context"""
        parts = [
            f"Command '{self._truncate_command(command)}' failed",
            f"exit code {exit_code}",
            f"time {execution_time:.2f}s"
        ]

        if error.strip():
            # Only show first line of error to avoid log spam
            parts.append(f"stderr: {error.strip().splitlines()[0]}")

        return " | ".join(parts)

    def __enter__(self):
        if self.connect():
            return self
        raise ConnectionError(f"Failed to connect to {self.host}")

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
