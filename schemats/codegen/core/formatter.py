"""
Source formatting for generated code.

The composer hands its text to a Formatter and returns exactly what the
formatter returns. Two implementations are provided: an in-process
brace-depth reindenter and a wrapper around the ``tsfmt`` executable.
"""

import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ...exceptions import SchematsError
from ...logging_config import get_logger

logger = get_logger(__name__)


class FormattingError(SchematsError):
    """Raised when formatting rejects or fails on the composed text."""

    pass


@dataclass(frozen=True)
class FormatterOptions:
    """Options understood by formatters."""

    replace: bool = False
    verify: bool = False
    tsconfig: bool = True
    tslint: bool = True
    editorconfig: bool = True
    tsfmt: bool = True
    vscode: bool = False
    tsconfig_file: Optional[str] = None
    tslint_file: Optional[str] = None
    vscode_file: Optional[str] = None
    tsfmt_file: Optional[str] = None


class Formatter(ABC):
    """Formatting collaborator contract."""

    @abstractmethod
    def format(self, filename: str, source: str,
               options: Optional[FormatterOptions] = None) -> str:
        """
        Format source text.

        Args:
            filename: Name of the file the text belongs to
            source: Text to format
            options: Formatter options

        Returns:
            Formatted text

        Raises:
            FormattingError: If the text cannot be formatted
        """
        pass


class BuiltinFormatter(Formatter):
    """Reindents by brace depth, strips trailing whitespace, collapses blank lines."""

    OPENERS = "{(["
    CLOSERS = "})]"

    def __init__(self, indent_size: int = 2, max_blank_lines: int = 1):
        self.indent_size = indent_size
        self.max_blank_lines = max_blank_lines

    def format(self, filename: str, source: str,
               options: Optional[FormatterOptions] = None) -> str:
        options = options or FormatterOptions()
        formatted = self.format_code(source)

        if options.verify and formatted != source:
            raise FormattingError(f"{filename} is not formatted")

        if options.replace:
            try:
                Path(filename).write_text(formatted, encoding="utf-8")
            except OSError as e:
                raise FormattingError(f"Failed to write {filename}: {e}") from e
            logger.info("Formatted %s in place", filename)

        return formatted

    def format_code(self, code: str) -> str:
        """Apply formatting to generated code."""
        result_lines: List[str] = []
        depth = 0
        blank_count = 0
        in_comment = False

        for raw_line in code.split("\n"):
            line = raw_line.strip()

            if not line:
                blank_count += 1
                # Drop leading blank lines and runs longer than the limit
                if result_lines and blank_count <= self.max_blank_lines:
                    result_lines.append("")
                continue
            blank_count = 0

            if in_comment:
                prefix = " " if line.startswith("*") else ""
                result_lines.append(self._indent(depth) + prefix + line)
                in_comment = "*/" not in line
                continue

            leading_closers = len(line) - len(line.lstrip(self.CLOSERS))
            result_lines.append(self._indent(max(depth - leading_closers, 0)) + line)

            delta, in_comment = self._scan(line)
            if delta < 0 and -delta > depth:
                raise FormattingError("Unbalanced closing bracket in generated code")
            depth += delta

        if in_comment:
            raise FormattingError("Unterminated block comment in generated code")
        if depth != 0:
            raise FormattingError("Unbalanced brackets in generated code")

        while result_lines and not result_lines[-1]:
            result_lines.pop()

        return "\n".join(result_lines) + "\n"

    def _indent(self, depth: int) -> str:
        return " " * (depth * self.indent_size)

    def _scan(self, line: str) -> tuple:
        """Return (bracket depth change, inside unterminated block comment)."""
        delta = 0
        quote = None
        i = 0
        while i < len(line):
            char = line[i]
            if quote:
                if char == "\\":
                    i += 2
                    continue
                if char == quote:
                    quote = None
            elif line.startswith("//", i):
                break
            elif line.startswith("/*", i):
                end = line.find("*/", i + 2)
                if end == -1:
                    return delta, True
                i = end + 2
                continue
            elif char in "'\"`":
                quote = char
            elif char in self.OPENERS:
                delta += 1
            elif char in self.CLOSERS:
                delta -= 1
            i += 1
        if quote:
            raise FormattingError(f"Unterminated string literal in generated code: {line}")
        return delta, False


class TsfmtFormatter(Formatter):
    """Formats through the typescript-formatter command-line tool."""

    def __init__(self, executable: str = "tsfmt"):
        self.executable = executable

    def build_command(self, filename: str, options: FormatterOptions) -> List[str]:
        command = [self.executable, "--stdin"]
        if options.replace:
            command.append("--replace")
        if options.verify:
            command.append("--verify")

        for flag, enabled, path in (
            ("tsconfig", options.tsconfig, options.tsconfig_file),
            ("tslint", options.tslint, options.tslint_file),
            ("editorconfig", options.editorconfig, None),
            ("vscode", options.vscode, options.vscode_file),
            ("tsfmt", options.tsfmt, options.tsfmt_file),
        ):
            if not enabled:
                command.append(f"--no-{flag}")
            elif path:
                command.extend([f"--use{flag.capitalize()}", path])

        command.append(filename)
        return command

    def format(self, filename: str, source: str,
               options: Optional[FormatterOptions] = None) -> str:
        options = options or FormatterOptions()

        if shutil.which(self.executable) is None:
            raise FormattingError(f"Formatter executable not found: {self.executable}")

        command = self.build_command(filename, options)
        logger.debug("Running formatter: %s", " ".join(command))

        try:
            completed = subprocess.run(
                command,
                input=source,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise FormattingError(f"Failed to run {self.executable}: {e}") from e

        if completed.returncode != 0:
            raise FormattingError(
                f"{self.executable} failed on {filename}: {completed.stderr.strip()}"
            )

        return completed.stdout


def get_formatter(name: str = "builtin", indent_size: int = 2) -> Formatter:
    """Create a formatter by name."""
    if name == "builtin":
        return BuiltinFormatter(indent_size=indent_size)
    if name == "tsfmt":
        return TsfmtFormatter()
    raise FormattingError(f"Unknown formatter: {name}")
