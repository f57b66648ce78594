"""Built-in commands available in every session."""
from __future__ import annotations

from cmdmux.core import CommandRegistry


def cmd_echo(args: list[str]) -> None:
    """Print the arguments separated by spaces."""
    print(" ".join(args))


def builtin_registry() -> CommandRegistry:
    """Create a fresh registry holding the built-in commands."""
    return CommandRegistry().register("echo", cmd_echo)
