"""
Command Registry mapping command names to handlers.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional

# A handler receives the positional arguments of a command; its return value is ignored.
Handler = Callable[[list[str]], None]


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError(f"Command name must be a non-empty string, got {name!r}")


class CommandRegistry:
    """Registry for command handlers.

    Names are case-sensitive. Registering a name that already exists
    replaces its handler (last write wins).

    Example:
        registry = CommandRegistry()
        registry.register("greet", greet).register_many(["add", "plus"], add)

        @registry.command("echo", "say")
        def echo(args):
            print(" ".join(args))
    """

    def __init__(self):
        self._commands: dict[str, Handler] = {}
        self._lock = threading.RLock()

    def register(self, name: str, handler: Handler) -> CommandRegistry:
        """Register a handler under a name, replacing any existing one.

        Returns:
            The registry itself, for chaining.
        """
        _check_name(name)
        if not callable(handler):
            raise TypeError(f"Handler for {name!r} is not callable")
        with self._lock:
            self._commands[name] = handler
        return self

    def register_many(self, names: Iterable[str], handler: Handler) -> CommandRegistry:
        """Register the same handler under every given name.

        Raises:
            TypeError: If `names` is a single string rather than a collection.
        """
        if isinstance(names, str):
            raise TypeError(f"register_many expects a collection of names, got the string {names!r}")
        names = list(names)
        for name in names:
            _check_name(name)
        with self._lock:
            for name in names:
                self.register(name, handler)
        return self

    @contextmanager
    def locked(self) -> Iterator[CommandRegistry]:
        """Hold the registry lock so a batch of changes is applied atomically.

        Usage:
            with registry.locked():
                registry.register("a", a).register("b", b)
        """
        with self._lock:
            yield self

    def command(self, *names: str) -> Callable[[Handler], Handler]:
        """Decorator to register a function as a command.

        Usage:
            @registry.command()
            def status(args): ...

            @registry.command("quit", "q")
            def stop(args): ...
        """
        def decorator(func: Handler) -> Handler:
            self.register_many(names or (func.__name__,), func)
            return func
        return decorator

    def unregister(self, name: str) -> bool:
        """Remove a command. Returns False if it was not registered."""
        with self._lock:
            return self._commands.pop(name, None) is not None

    def has(self, name: str) -> bool:
        """Check whether a command is registered."""
        with self._lock:
            return name in self._commands

    def resolve(self, name: str) -> Optional[Handler]:
        """Get the handler for a name, or None."""
        with self._lock:
            return self._commands.get(name)

    def names(self) -> list[str]:
        """Get all registered names sorted alphabetically."""
        with self._lock:
            return sorted(self._commands)

    def items(self) -> list[tuple[str, Handler]]:
        """Snapshot of (name, handler) pairs in registration order."""
        with self._lock:
            return list(self._commands.items())

    def copy(self) -> CommandRegistry:
        """Shallow copy sharing the same handlers."""
        clone = CommandRegistry()
        clone._commands = dict(self.items())
        return clone

    def __or__(self, other: CommandRegistry) -> CommandRegistry:
        from cmdmux.core.merge import combine
        if not isinstance(other, CommandRegistry):
            return NotImplemented
        return combine(self, other)

    def __ior__(self, other: CommandRegistry) -> CommandRegistry:
        from cmdmux.core.merge import update
        if not isinstance(other, CommandRegistry):
            return NotImplemented
        return update(self, other)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter([name for name, _ in self.items()])

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandRegistry):
            return NotImplemented
        return dict(self.items()) == dict(other.items())

    def __repr__(self) -> str:
        return f"CommandRegistry({self.names()!r})"
