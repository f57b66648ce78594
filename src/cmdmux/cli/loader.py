"""
Command loader - imports command modules from files and merges them.

A command module is a Python file exposing a module-level ``registry``:

    # ~/.cmdmux/commands/greet.py
    from cmdmux import CommandRegistry

    registry = CommandRegistry()

    @registry.command("greet", "hello")
    def greet(args):
        print("Hello", *args)

When several modules define the same name, the first one loaded keeps it;
later ones are either dropped or kept under a suffixed name.
"""

from __future__ import annotations

import logging
import sys
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from typing import Iterable

from cmdmux.core import (
    DEFAULT_COLLISION_SUFFIX,
    CommandLoadError,
    CommandRegistry,
    merge_into,
)

logger = logging.getLogger(__name__)

# Default user commands directory
USER_COMMANDS_DIR = Path.home() / ".cmdmux" / "commands"


def discover_command_files(commands_dir: Path) -> list[Path]:
    """
    Discover command modules in the given directory.

    Hidden and private files (leading "." or "_") are skipped.

    Args:
        commands_dir: Directory to search

    Returns:
        Sorted list of .py paths.
    """
    if not commands_dir.exists():
        return []

    if not commands_dir.is_dir():
        logger.warning(f"Commands path is not a directory: {commands_dir}")
        return []

    return [
        path for path in sorted(commands_dir.glob("*.py"))
        if not path.name.startswith((".", "_"))
    ]


def load_command_file(path: Path, prefix: str = "cmdmux_cmd") -> CommandRegistry:
    """
    Import a command module and return its registry.

    Args:
        path: Path to the module file.
        prefix: Module name prefix for sys.modules

    Raises:
        CommandLoadError: The file is missing, fails to import, or has no
            ``registry`` of type CommandRegistry.
    """
    path = Path(path)
    if not path.is_file():
        raise CommandLoadError(path, "file not found")

    module_name = f"{prefix}.{path.stem}"
    spec = spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise CommandLoadError(path, "could not create module spec")

    module = module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        sys.modules.pop(module_name, None)
        raise CommandLoadError(path, f"syntax error: {e}") from e
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise CommandLoadError(path, f"{type(e).__name__}: {e}") from e

    registry = getattr(module, "registry", None)
    if not isinstance(registry, CommandRegistry):
        raise CommandLoadError(path, "module has no 'registry' CommandRegistry")

    logger.info(f"Loaded {len(registry)} commands from {path}")
    return registry


def load_command_files(
    paths: Iterable[Path],
    suffix_collisions: bool = True,
    suffix: str = DEFAULT_COLLISION_SUFFIX,
) -> CommandRegistry:
    """
    Load command modules in order and merge them into one registry.

    Directories are expanded with discover_command_files().

    Args:
        paths: Files or directories to load.
        suffix_collisions: Keep later duplicates under ``name + suffix``
            instead of dropping them.
        suffix: Suffix for colliding names.

    Returns:
        The merged registry.
    """
    merged = CommandRegistry()
    for path in paths:
        path = Path(path)
        files = discover_command_files(path) if path.is_dir() else [path]
        for file in files:
            merge_into(merged, load_command_file(file), suffix_collisions, suffix)
    return merged


def load_user_commands(
    commands_dir: Path | None = None,
    suffix_collisions: bool = True,
    suffix: str = DEFAULT_COLLISION_SUFFIX,
) -> CommandRegistry:
    """
    Load every command module in the user commands directory.

    Unlike load_command_files(), a module that fails to load is logged
    and skipped so one broken file does not stop the others.

    Args:
        commands_dir: Directory to load from (default USER_COMMANDS_DIR)
        suffix_collisions: Keep later duplicates under ``name + suffix``.
        suffix: Suffix for colliding names.

    Returns:
        The merged registry of the modules that loaded.
    """
    commands_dir = commands_dir or USER_COMMANDS_DIR
    merged = CommandRegistry()
    for file in discover_command_files(commands_dir):
        try:
            registry = load_command_file(file)
        except CommandLoadError as e:
            logger.warning(f"Skipping command module: {e}")
            continue
        merge_into(merged, registry, suffix_collisions, suffix)
    return merged
