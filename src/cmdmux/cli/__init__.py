"""
CLI module for the cmdmux package.

Provides the interactive loops, the command module loader and the
``cmdmux`` console script.
"""

from cmdmux.cli._simple_repl import handle_line
from cmdmux.cli._simple_repl import repl as simple_repl

# Try to import feature-rich REPL, fallback to simple
try:
    from cmdmux.cli._repl import repl
    RICH_REPL = True
except ImportError:
    repl = simple_repl
    RICH_REPL = False

__all__ = [
    "repl",
    "simple_repl",
    "handle_line",
    "RICH_REPL",
]
