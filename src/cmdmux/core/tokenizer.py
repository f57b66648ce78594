"""
Line tokenizer: turns one line of input into a command and its arguments.
"""

from __future__ import annotations

from cmdmux.core.datamodels import ParsedCommand
from cmdmux.core.exceptions import EmptyInputError

DEFAULT_DELIMITER = " "


def split_tokens(line: str, delimiter: str = DEFAULT_DELIMITER) -> list[str]:
    """Split a line on every occurrence of a single-character delimiter.

    Consecutive delimiters yield empty-string tokens; nothing is escaped
    or quoted.

    Raises:
        ValueError: If the delimiter is not exactly one character.
    """
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
    return line.split(delimiter)


def tokenize(line: str, delimiter: str = DEFAULT_DELIMITER) -> ParsedCommand:
    """Parse a line into a ParsedCommand.

    The first token is the command name, the remaining tokens are the
    arguments in their original order. A leading delimiter gives an empty
    command name and a trailing one gives an empty last argument.

    Args:
        line: Raw input line (without the trailing newline).
        delimiter: Single separator character.

    Returns:
        ParsedCommand with `command` and `args`.

    Raises:
        EmptyInputError: If the line is empty or whitespace only.
        ValueError: If the delimiter is not exactly one character.

    Example:
        >>> tokenize("add 3 4")
        ParsedCommand(command='add', args=['3', '4'])
    """
    if not line or not line.strip():
        raise EmptyInputError()

    command, *args = split_tokens(line, delimiter)
    return ParsedCommand(command=command, args=args)
