"""
Data models for parsing and dispatch.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cmdmux.core.exceptions import CommandError


class ParsedCommand(BaseModel):
    """A single input line split into a command name and its arguments."""
    command: str
    args: list[str] = Field(default_factory=list)


class DispatchOutcome(BaseModel):
    """Result of dispatching one command (or a sequence of commands)."""
    name: str
    ok: bool = True
    error: CommandError | None = Field(default=None, exclude=True)

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def success(cls, name: str) -> DispatchOutcome:
        return cls(name=name)

    @classmethod
    def failure(cls, name: str, error: CommandError) -> DispatchOutcome:
        return cls(name=name, ok=False, error=error)

    def raise_for_error(self) -> None:
        """Re-raise the carried error, if any."""
        if self.error is not None:
            raise self.error

    @property
    def message(self) -> str:
        """User-facing description of the outcome."""
        if self.ok:
            return ""
        return f"Error: {self.error}"

    def __bool__(self) -> bool:
        return self.ok
