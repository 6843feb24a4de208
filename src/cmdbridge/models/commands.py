"""
Command request, result and template data models.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ..validation import CommandFailedError

# Parsed output of the structured output parsers.
ParsedRow = List[str]
ParsedTable = List[ParsedRow]
KeyValueRecord = Dict[str, str]

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class CommandRequest:
    """
    A single command invocation.

    ``timeout`` of None means the executor's configured default.
    """

    command_line: str
    working_directory: Optional[Path] = None
    timeout: Optional[float] = None
    encoding: str = "utf-8"


@dataclass(frozen=True)
class CommandResult:
    """
    Captured output of one finished external command.

    A non-zero exit is reported through ``exit_succeeded`` instead of an
    exception; callers that treat it as fatal use :meth:`check`.
    """

    stdout: str
    stderr: str
    exit_succeeded: bool
    return_code: int = 0
    command: str = ""

    def check(self) -> "CommandResult":
        """Return self, or raise CommandFailedError for a non-zero exit."""
        if not self.exit_succeeded:
            detail = self.stderr.strip() or f"exit status {self.return_code}"
            raise CommandFailedError(
                f"Command failed: {detail}",
                command=self.command,
                stderr=self.stderr,
                return_code=self.return_code,
            )
        return self


@dataclass(frozen=True)
class CommandTemplateSpec:
    """An executable name plus its ordered argument list."""

    executable: str
    arguments: List[str] = field(default_factory=list)

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.arguments]

    def to_command_line(self) -> str:
        """
        Join the spec into one command-line string.

        Tokens containing whitespace are wrapped in double quotes so that
        the result tokenizes back into the same executable and arguments.
        """
        return " ".join(_quote(token) for token in self.argv)


def _quote(token: str) -> str:
    if token == "" or _WHITESPACE.search(token):
        return f'"{token}"'
    return token
