"""
Core module for the cmdmux package.

Provides the command registry, registry merging, line tokenizing and
dispatch.
"""

from cmdmux.core.datamodels import DispatchOutcome, ParsedCommand
from cmdmux.core.dispatcher import Dispatcher
from cmdmux.core.exceptions import (
    CommandError,
    CommandLoadError,
    EmptyInputError,
    UnknownCommandError,
)
from cmdmux.core.merge import DEFAULT_COLLISION_SUFFIX, combine, merge_into, update
from cmdmux.core.registry import CommandRegistry, Handler
from cmdmux.core.tokenizer import DEFAULT_DELIMITER, split_tokens, tokenize

__all__ = [
    # Registry
    "CommandRegistry",
    "Handler",
    # Merging
    "combine",
    "merge_into",
    "update",
    "DEFAULT_COLLISION_SUFFIX",
    # Dispatch
    "Dispatcher",
    # Tokenizer
    "tokenize",
    "split_tokens",
    "DEFAULT_DELIMITER",
    # Models
    "ParsedCommand",
    "DispatchOutcome",
    # Exceptions
    "CommandError",
    "UnknownCommandError",
    "EmptyInputError",
    "CommandLoadError",
]
