"""
REPL (Read-Eval-Print Loop) over plain input().
"""

from __future__ import annotations

import logging
from typing import Iterable

from cmdmux.core import (
    DEFAULT_DELIMITER,
    CommandRegistry,
    Dispatcher,
    EmptyInputError,
    tokenize,
)
from cmdmux.logging import log_exception

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "> "
DEFAULT_EXIT_COMMANDS = ("quit", "exit")


def handle_line(
    dispatcher: Dispatcher,
    line: str,
    delimiter: str = DEFAULT_DELIMITER,
    exit_commands: Iterable[str] = DEFAULT_EXIT_COMMANDS,
) -> bool:
    """Tokenize and dispatch one line, printing the outcome.

    Registered commands take precedence over exit commands. Only the line
    terminator is removed; leading and trailing delimiters are kept.

    Returns:
        True if the loop should stop.
    """
    line = line.rstrip("\r\n")
    try:
        parsed = tokenize(line, delimiter)
    except EmptyInputError:
        return False

    if parsed.command in exit_commands and not dispatcher.registry.has(parsed.command):
        print("Goodbye!")
        return True

    try:
        outcome = dispatcher.execute(parsed.command, parsed.args)
    except Exception as e:
        print(f"Command error: {log_exception(e, context=parsed.command)}")
        return False

    if not outcome.ok:
        print(outcome.message)
    return False


def repl(
    registry: CommandRegistry,
    prompt: str = DEFAULT_PROMPT,
    delimiter: str = DEFAULT_DELIMITER,
    exit_commands: Iterable[str] = DEFAULT_EXIT_COMMANDS,
) -> None:
    """Run the interactive loop until end of input or an exit command.

    Args:
        registry: Commands to dispatch to.
        prompt: Text shown before each line is read.
        delimiter: Single character separating command and arguments.
        exit_commands: Names that stop the loop; pass () to only stop on EOF.
    """
    dispatcher = Dispatcher(registry)
    exit_commands = tuple(exit_commands)
    logger.debug(f"Starting simple REPL with {len(registry)} commands")

    while True:
        try:
            line = input(prompt)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            # Ctrl+C during prompt - discard the line
            print()
            continue

        if handle_line(dispatcher, line, delimiter, exit_commands):
            break
