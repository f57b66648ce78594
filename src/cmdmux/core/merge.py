"""
Combining command registries.

Two collision policies exist and callers may rely on either direction:

- `combine` / `update` favour the *incoming* registry (right-biased,
  same as calling `register` again).
- `merge_into` favours entries *already present* in the target and either
  drops the incoming handler or keeps it under a suffixed name.
"""

from __future__ import annotations

import logging

from cmdmux.core.registry import CommandRegistry

logger = logging.getLogger(__name__)

DEFAULT_COLLISION_SUFFIX = "_bis"


def combine(a: CommandRegistry, b: CommandRegistry) -> CommandRegistry:
    """Build a new registry holding every entry of `a` and `b`.

    Not symmetric: on a name collision the handler from `b` is kept.
    Neither input is modified.
    """
    merged = CommandRegistry()
    for name, handler in a.items():
        merged.register(name, handler)
    for name, handler in b.items():
        merged.register(name, handler)
    return merged


def update(target: CommandRegistry, other: CommandRegistry) -> CommandRegistry:
    """Overlay `other` onto `target` in place; `other` wins on collision."""
    entries = other.items()
    with target.locked():
        for name, handler in entries:
            target.register(name, handler)
    return target


def merge_into(
    target: CommandRegistry,
    other: CommandRegistry,
    suffix_collisions: bool,
    suffix: str = DEFAULT_COLLISION_SUFFIX,
) -> CommandRegistry:
    """Merge `other` into `target` in place, keeping target's entries.

    For each entry of `other`:
        - name not in target: registered as-is
        - name in target and suffix_collisions: registered as `name + suffix`
          (overwrites whatever is already under the suffixed name)
        - name in target otherwise: dropped

    Args:
        target: Registry to modify.
        other: Registry to read from (not modified).
        suffix_collisions: Keep colliding handlers under a suffixed name.
        suffix: Suffix appended to colliding names.

    Returns:
        The target registry.
    """
    if suffix_collisions and not suffix:
        raise ValueError("Collision suffix must be non-empty")

    entries = other.items()
    with target.locked():
        for name, handler in entries:
            if not target.has(name):
                target.register(name, handler)
            elif suffix_collisions:
                renamed = f"{name}{suffix}"
                logger.debug(f"Collision on '{name}', keeping incoming handler as '{renamed}'")
                target.register(renamed, handler)
            else:
                logger.debug(f"Collision on '{name}', dropping incoming handler")
    return target
