"""
cmdmux - Command Registry and Dispatcher

Maps command names to handlers, merges registries, parses input lines
and runs an interactive loop dispatching each line to its handler.

Example usage:
    from cmdmux import CommandRegistry, Dispatcher

    registry = CommandRegistry()

    @registry.command("greet", "hi")
    def greet(args: list[str]) -> None:
        print("Hello", *args)

    Dispatcher(registry).execute_line("greet world")

    # Interactive loop (prompt_toolkit when available)
    from cmdmux.cli import repl
    repl(registry, prompt="> ")
"""

__version__ = "0.1.0"

from cmdmux.core import (
    CommandError,
    CommandLoadError,
    CommandRegistry,
    DispatchOutcome,
    Dispatcher,
    EmptyInputError,
    Handler,
    ParsedCommand,
    UnknownCommandError,
    combine,
    merge_into,
    tokenize,
    update,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "CommandRegistry",
    "Handler",
    "Dispatcher",
    "combine",
    "merge_into",
    "update",
    "tokenize",
    # Models
    "ParsedCommand",
    "DispatchOutcome",
    # Exceptions
    "CommandError",
    "UnknownCommandError",
    "EmptyInputError",
    "CommandLoadError",
]
