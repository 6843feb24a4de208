"""
Command execution.

This module is the only place where cmdbridge starts external processes. It
runs either a shell command line (with the platform's encoding directive
prepended) or an executable with discrete arguments, waits for it under a
timeout while reading its output against a size bound, and classifies
launch failures.
"""

import logging
import os
import signal
import subprocess
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import psutil

from ..models.commands import CommandRequest, CommandResult, CommandTemplateSpec
from ..models.config import ExecutorConfig
from ..validation import (
    CommandNotFoundError,
    CommandPermissionError,
    CommandTimeoutError,
    OutputTooLargeError,
    handle_subprocess_error,
    validate_directory,
    validate_positive_float,
)
from .platform import PlatformProfile, get_platform_profile

logger = logging.getLogger(__name__)

# Environment applied to argument-list launches, which have no shell to run
# the encoding directive in.
_UTF8_ENV: Dict[str, Dict[str, str]] = {
    "windows": {"PYTHONIOENCODING": "utf-8"},
    "posix": {"LC_ALL": "C.UTF-8", "LANG": "C.UTF-8"},
}

_POSIX_HOST = os.name != "nt"

# Seconds between checks of the deadline and the output bound.
_POLL_INTERVAL = 0.05
_READ_CHUNK_SIZE = 65536
# How long to wait for a killed command to be reaped.
_KILL_GRACE_SECONDS = 2.0


class CommandExecutor:
    """
    Runs one external process per call and returns its captured output.

    Non-zero exits are returned as a CommandResult with
    ``exit_succeeded=False``. Everything that prevents a usable result is
    raised as a classified ExecutionError.
    """

    def __init__(
        self,
        config: Optional[ExecutorConfig] = None,
        platform: Optional[PlatformProfile] = None,
    ):
        self.config = config or ExecutorConfig()
        self.platform = platform or get_platform_profile(self.config.platform)

    def execute(self, request: CommandRequest) -> CommandResult:
        """
        Run a command line through the platform shell.

        Args:
            request: The command line, working directory and timeout.

        Returns:
            The captured output and exit status.

        Raises:
            ValidationError: If the working directory or timeout is invalid.
            CommandNotFoundError: If the shell could not locate the command.
            CommandPermissionError: If the command could not be executed.
            CommandTimeoutError: If the timeout expired.
            OutputTooLargeError: If the output exceeded the configured bound.
        """
        full_command = f"{self.platform.encoding_preamble}{request.command_line}"
        return self._run(
            full_command,
            display=request.command_line,
            shell=True,
            cwd=request.working_directory,
            timeout=request.timeout,
            encoding=request.encoding,
        )

    def execute_args(
        self,
        executable: str,
        arguments: Sequence[str] = (),
        working_directory: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Run an executable with discrete arguments, without a shell.

        Raises the same classified errors as :meth:`execute`.
        """
        argv = [executable, *arguments]
        env = {**os.environ, **_UTF8_ENV.get(self.platform.name, {})}
        return self._run(
            argv,
            display=CommandTemplateSpec(executable, list(arguments)).to_command_line(),
            shell=False,
            cwd=working_directory,
            timeout=timeout,
            env=env,
        )

    def execute_spec(
        self,
        spec: CommandTemplateSpec,
        working_directory: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """Run a compiled command template with discrete arguments."""
        return self.execute_args(
            spec.executable,
            spec.arguments,
            working_directory=working_directory,
            timeout=timeout,
        )

    def _run(
        self,
        args: Union[str, List[str]],
        display: str,
        shell: bool,
        cwd: Optional[Union[str, Path]],
        timeout: Optional[float],
        encoding: str = "utf-8",
        env: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        if cwd is not None:
            cwd = validate_directory(cwd, field_name="working_directory")
        effective_timeout = validate_positive_float(
            self.config.timeout_seconds if timeout is None else timeout,
            min_value=0.001,
            field_name="timeout",
        )

        logger.debug(f"Executing command: '{display}' in '{cwd or os.getcwd()}'")
        try:
            process = subprocess.Popen(
                args,
                cwd=cwd,
                shell=shell,
                executable=self.platform.shell_executable if shell else None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=env,
                # Own process group, so background children die with it.
                start_new_session=_POSIX_HOST,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(
                f"Command not found: {_program_name(args)}", command=display
            ) from e
        except PermissionError as e:
            raise CommandPermissionError(
                f"Permission denied: {_program_name(args)}", command=display
            ) from e
        except OSError as e:
            handle_subprocess_error(error=e, command=display, reraise=True, logger=logger)
            raise

        reader = _BoundedOutputReader(process, self.config.max_output_bytes)
        reader.start()
        deadline = time.monotonic() + effective_timeout

        # Done once the child has exited and both pipes reached EOF. A
        # background grandchild holding a pipe open keeps the command running.
        while True:
            if reader.exceeded.is_set():
                _terminate(process)
                raise OutputTooLargeError(
                    "Command output exceeds the "
                    f"{self.config.max_output_bytes} byte limit: {display}",
                    command=display,
                    limit=self.config.max_output_bytes,
                )
            if not reader.is_alive() and process.poll() is not None:
                break
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                _terminate(process)
                raise CommandTimeoutError(
                    f"Command timed out after {effective_timeout}s: {display}",
                    command=display,
                    timeout=effective_timeout,
                )
            wait_for = min(remaining, _POLL_INTERVAL)
            if reader.is_alive():
                reader.join(wait_for)
            else:
                try:
                    process.wait(timeout=wait_for)
                except subprocess.TimeoutExpired:
                    pass

        stdout_bytes = reader.output("stdout")
        stderr_bytes = reader.output("stderr")
        process.stdout.close()
        process.stderr.close()

        stdout = stdout_bytes.decode(encoding, errors="replace")
        stderr = stderr_bytes.decode(encoding, errors="replace")
        return_code = process.returncode

        if shell and return_code in self.platform.not_found_codes:
            raise CommandNotFoundError(
                f"Command not found: {display}", command=display, stderr=stderr
            )
        if shell and return_code in self.platform.permission_denied_codes:
            raise CommandPermissionError(
                f"Permission denied: {display}", command=display, stderr=stderr
            )

        if return_code != 0:
            logger.debug(f"Command '{display}' exited with status {return_code}")

        return CommandResult(
            stdout=stdout.strip(),
            stderr=stderr,
            exit_succeeded=return_code == 0,
            return_code=return_code,
            command=display,
        )


def _program_name(args: Union[str, List[str]]) -> str:
    if isinstance(args, str):
        return args
    return args[0] if args else ""


class _BoundedOutputReader:
    """
    Drains a child's stdout and stderr on two daemon threads.

    Reading stops as soon as the combined byte count passes ``limit``, so at
    most one chunk beyond the bound is ever held in memory.
    """

    def __init__(self, process: subprocess.Popen, limit: int):
        self.limit = limit
        self.exceeded = threading.Event()
        self._lock = threading.Lock()
        self._total = 0
        self._chunks: Dict[str, List[bytes]] = {"stdout": [], "stderr": []}
        self._threads = [
            threading.Thread(
                target=self._pump, args=(stream, name),
                name=f"CommandOutput-{name}", daemon=True,
            )
            for name, stream in (("stdout", process.stdout), ("stderr", process.stderr))
        ]

    def start(self) -> None:
        for thread in self._threads:
            thread.start()

    def is_alive(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def join(self, timeout: float) -> None:
        for thread in self._threads:
            if thread.is_alive():
                thread.join(timeout)
                return

    def output(self, name: str) -> bytes:
        with self._lock:
            return b"".join(self._chunks[name])

    def _pump(self, stream, name: str) -> None:
        try:
            for chunk in iter(lambda: stream.read1(_READ_CHUNK_SIZE), b""):
                with self._lock:
                    self._chunks[name].append(chunk)
                    self._total += len(chunk)
                    if self._total > self.limit:
                        self.exceeded.set()
                        return
        except (OSError, ValueError) as e:
            logger.debug(f"Stopped reading {name}: {e}")


def _terminate(process: subprocess.Popen) -> None:
    """Kill the command and reap it, waiting only briefly."""
    _kill_process_tree(process)
    try:
        process.wait(timeout=_KILL_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        logger.warning(f"Process {process.pid} did not exit after being killed")


def _kill_process_tree(process: subprocess.Popen) -> None:
    """Kill a child and everything it spawned."""
    try:
        children = psutil.Process(process.pid).children(recursive=True)
    except psutil.NoSuchProcess:
        children = []
    for child in children:
        try:
            child.kill()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass
    if _POSIX_HOST:
        # Also reaches children the shell has already left behind.
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            pass
    # The direct child is killed through Popen so that Popen reaps it.
    process.kill()


_default_executor: Optional[CommandExecutor] = None


def get_executor() -> CommandExecutor:
    """
    Get the shared executor built from the global configuration.

    Returns:
        Global CommandExecutor instance
    """
    global _default_executor
    if _default_executor is None:
        from ..config import get_config

        _default_executor = CommandExecutor(get_config().executor)
    return _default_executor


def reset_executor() -> None:
    """Drop the shared executor so the next call rebuilds it from config."""
    global _default_executor
    _default_executor = None


def run_command(
    command: str,
    cwd: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """Execute a command line with the shared executor.

    Examples:
        >>> run_command("echo hello").stdout
        'hello'
    """
    request = CommandRequest(
        command_line=command,
        working_directory=Path(cwd) if cwd is not None else None,
        timeout=timeout,
    )
    return get_executor().execute(request)
