"""
Dispatcher for looking up and invoking registered commands.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from cmdmux.core.datamodels import DispatchOutcome
from cmdmux.core.exceptions import EmptyInputError, UnknownCommandError
from cmdmux.core.registry import CommandRegistry
from cmdmux.core.tokenizer import DEFAULT_DELIMITER, tokenize

logger = logging.getLogger(__name__)


class Dispatcher:
    """Executes commands from a CommandRegistry.

    Unknown commands are reported through the returned DispatchOutcome
    rather than raised. Exceptions raised inside a handler propagate
    unchanged.
    """

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    def execute(self, name: str, args: Sequence[str] = ()) -> DispatchOutcome:
        """Invoke the handler registered under `name` with `args`."""
        handler = self.registry.resolve(name)
        if handler is None:
            logger.info(f"Unknown command: {name!r}")
            return DispatchOutcome.failure(name, UnknownCommandError(name))

        logger.debug(f"Dispatching {name!r} with args {list(args)!r}")
        handler(list(args))
        return DispatchOutcome.success(name)

    def execute_sequence(self, names: Iterable[str], args: Sequence[str] = ()) -> DispatchOutcome:
        """Execute several commands in order with the same arguments.

        Stops at the first failure and returns it; commands after it are
        not run.
        """
        outcome = DispatchOutcome.success("")
        for name in names:
            outcome = self.execute(name, args)
            if not outcome.ok:
                break
        return outcome

    def execute_line(self, line: str, delimiter: str = DEFAULT_DELIMITER) -> DispatchOutcome:
        """Tokenize a line of input and execute it."""
        try:
            parsed = tokenize(line, delimiter)
        except EmptyInputError as e:
            return DispatchOutcome.failure("", e)
        return self.execute(parsed.command, parsed.args)
