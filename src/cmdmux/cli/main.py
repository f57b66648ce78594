#!/usr/bin/env python3
"""
CLI entry point for the interactive command loop (cmdmux command).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from cmdmux.cli import RICH_REPL, repl, simple_repl
from cmdmux.cli.builtins import builtin_registry
from cmdmux.cli.loader import USER_COMMANDS_DIR, load_command_files, load_user_commands
from cmdmux.config import DEFAULTS, get_config_manager
from cmdmux.core import CommandLoadError, merge_into
from cmdmux.logging import close_logging, configure_logging

logger = logging.getLogger(__name__)


def _delimiter(value: str) -> str:
    """argparse type for a single-character delimiter."""
    if value == "\\t":
        value = "\t"
    if len(value) != 1:
        raise argparse.ArgumentTypeError("delimiter must be a single character")
    return value


def _parse_config_value(raw: str) -> Any:
    """Interpret a --set-config value as JSON, falling back to plain text."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _set_config_value(cfg_mgr, key: str, raw: str) -> None:
    """Store a --set-config value, retrying as plain text if the JSON reading is rejected.

    `delimiter=5` decodes to an int, which a text setting refuses; the
    setting then gets the string "5" instead.
    """
    value = _parse_config_value(raw)
    try:
        cfg_mgr.set(key, value)
    except ValueError:
        if isinstance(value, str):
            raise
        cfg_mgr.set(key, raw)


def print_config():
    """Print current configuration."""
    cfg_mgr = get_config_manager()
    settings = cfg_mgr.list_settings()

    print(f"Config file: {cfg_mgr.CONFIG_FILE}")

    if settings:
        print("\nCustom settings:")
        for key, value in settings.items():
            print(f"  {key}: {value!r}")

    print("\nDefaults (used when not set):")
    for key, value in DEFAULTS.items():
        if key not in settings:
            print(f"  {key}: {value!r}")

    print("\nSet with: cmdmux --set-config key=value")
    print()


def build_parser(cfg) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdmux",
        description="Interactive command dispatcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Command modules are Python files exposing a `registry` (CommandRegistry).
Modules in {USER_COMMANDS_DIR} are loaded first.

Examples:
    cmdmux                               # Built-in commands only
    cmdmux greet.py math.py              # Load command modules
    cmdmux --delimiter , tools/          # Comma-separated input, load a directory
    cmdmux --set-config prompt='$ '      # Change the default prompt
        """,
    )
    parser.add_argument("files", nargs="*", type=Path,
                        help="Command module files or directories to load")
    parser.add_argument("--prompt", "-p", default=cfg.get("prompt"),
                        help=f"Prompt text (default: {cfg.get('prompt')!r})")
    parser.add_argument("--delimiter", "-d", type=_delimiter, default=cfg.get("delimiter"),
                        help=f"Argument delimiter (default: {cfg.get('delimiter')!r})")
    parser.add_argument("--simple", action="store_true", default=cfg.get("simple"),
                        help="Use simple loop (no prompt_toolkit features)")
    parser.add_argument("--suffix-collisions", action=argparse.BooleanOptionalAction,
                        default=cfg.get("suffix_collisions"),
                        help="Keep duplicate commands from later modules under a suffixed name")
    parser.add_argument("--log-file", type=Path, default=cfg.get("log_file"),
                        help="Write a log file")
    parser.add_argument("--debug", action="store_true",
                        help="Log at DEBUG level (to --log-file or the default log)")

    # Config management
    parser.add_argument("--config", action="store_true",
                        help="Show current configuration and exit")
    parser.add_argument("--init-config", action="store_true",
                        help="Write a config file with every default and exit")
    parser.add_argument("--set-config", metavar="KEY=VALUE",
                        help="Set a config value and exit")
    parser.add_argument("--unset-config", metavar="KEY",
                        help="Reset a config value to its default and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the cmdmux CLI."""
    cfg_mgr = get_config_manager()
    cfg = cfg_mgr.config

    args = build_parser(cfg).parse_args(argv)

    if args.config:
        print_config()
        return 0

    if args.init_config:
        if cfg_mgr.CONFIG_FILE.exists():
            print(f"Config file already exists: {cfg_mgr.CONFIG_FILE}")
            return 0
        cfg_mgr.load(create_if_missing=True)
        print(f"Created {cfg_mgr.CONFIG_FILE}")
        return 0

    if args.set_config:
        key, sep, value = args.set_config.partition("=")
        if not sep:
            print("Error: --set-config expects KEY=VALUE", file=sys.stderr)
            return 2
        try:
            _set_config_value(cfg_mgr, key.strip(), value)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        print(f"Set {key.strip()} in {cfg_mgr.CONFIG_FILE}")
        return 0

    if args.unset_config:
        try:
            cfg_mgr.unset(args.unset_config)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        print(f"Unset {args.unset_config}")
        return 0

    if args.debug or args.log_file:
        configure_logging(args.log_file, level=logging.DEBUG if args.debug else logging.INFO)

    try:
        suffix = cfg.get("collision_suffix")
        # Broken user modules are skipped; files named on the command line must load
        registry = load_user_commands(
            USER_COMMANDS_DIR, suffix_collisions=args.suffix_collisions, suffix=suffix,
        )
        try:
            named = load_command_files(
                args.files, suffix_collisions=args.suffix_collisions, suffix=suffix,
            )
        except CommandLoadError as e:
            logger.error(str(e))
            print(f"Error: {e}", file=sys.stderr)
            return 1
        merge_into(registry, named, args.suffix_collisions, suffix)

        # Loaded modules shadow built-ins of the same name
        merge_into(registry, builtin_registry(), suffix_collisions=False)

        exit_commands = cfg.get("exit_commands")
        if args.simple or not RICH_REPL:
            simple_repl(registry, prompt=args.prompt, delimiter=args.delimiter,
                        exit_commands=exit_commands)
        else:
            repl(registry, prompt=args.prompt, delimiter=args.delimiter,
                 exit_commands=exit_commands, history_file=Path(cfg.get("history_file")))
    finally:
        close_logging()

    return 0


if __name__ == "__main__":
    sys.exit(main())
