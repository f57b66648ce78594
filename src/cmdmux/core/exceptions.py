"""
Exception classes for the command registry and dispatcher.
"""

from __future__ import annotations


class CommandError(Exception):
    """Base exception for command-related errors."""


class UnknownCommandError(CommandError):
    """No handler is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Unknown command "{name}"')


class EmptyInputError(CommandError):
    """Input line contained nothing to parse."""

    def __init__(self, message: str = "Empty input"):
        super().__init__(message)


class CommandLoadError(CommandError):
    """A command module could not be loaded."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load commands from {path}: {reason}")
