"""
Feature-rich REPL (Read-Eval-Print Loop) implementation using prompt_toolkit.

Adds persistent history, history suggestions and completion of command
names on top of the simple loop.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory, InMemoryHistory

from cmdmux.cli._simple_repl import DEFAULT_EXIT_COMMANDS, DEFAULT_PROMPT, handle_line
from cmdmux.core import DEFAULT_DELIMITER, CommandRegistry, Dispatcher

logger = logging.getLogger(__name__)


class CommandCompleter(Completer):
    """Completes the command name (the first token) from the registry."""

    def __init__(
        self,
        registry: CommandRegistry,
        delimiter: str = DEFAULT_DELIMITER,
        extra: Iterable[str] = (),
    ):
        self.registry = registry
        self.delimiter = delimiter
        self.extra = tuple(extra)

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor.lstrip()

        # Only the command position is completed; arguments are free text
        if self.delimiter in text:
            return

        candidates = sorted(set(self.registry.names()) | set(self.extra))
        for name in candidates:
            if name.startswith(text):
                yield Completion(name, start_position=-len(text))


def _make_history(history_file: Optional[Path]):
    if history_file is None:
        return InMemoryHistory()
    history_file = Path(history_file)
    history_file.parent.mkdir(parents=True, exist_ok=True)
    return FileHistory(str(history_file))


def repl(
    registry: CommandRegistry,
    prompt: str = DEFAULT_PROMPT,
    delimiter: str = DEFAULT_DELIMITER,
    exit_commands: Iterable[str] = DEFAULT_EXIT_COMMANDS,
    history_file: Optional[Path] = None,
) -> None:
    """Run the interactive loop until end of input or an exit command.

    Args:
        registry: Commands to dispatch to.
        prompt: Text shown before each line is read.
        delimiter: Single character separating command and arguments.
        exit_commands: Names that stop the loop; pass () to only stop on EOF.
        history_file: Where to persist input history (in memory if None).
    """
    dispatcher = Dispatcher(registry)
    exit_commands = tuple(exit_commands)

    session = PromptSession(
        history=_make_history(history_file),
        auto_suggest=AutoSuggestFromHistory(),
        completer=CommandCompleter(registry, delimiter, exit_commands),
        complete_while_typing=True,
    )
    logger.debug(f"Starting REPL with {len(registry)} commands")

    while True:
        try:
            line = session.prompt(prompt)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            # Ctrl+C clears the current line
            continue

        if handle_line(dispatcher, line, delimiter, exit_commands):
            break
