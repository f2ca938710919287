"""
Process-wide hook runner accessor.

Only the process boundary (superpack.bootstrap) installs a runner here.
Lifecycle code that cannot be handed a runner explicitly reads it back with
get_global_hook_runner() and treats None as "no plugins".
"""

from typing import Optional

from superpack.core.hooks.runner import HookRunner

_global_runner: Optional[HookRunner] = None


def set_global_hook_runner(runner: Optional[HookRunner]) -> None:
    global _global_runner
    _global_runner = runner


def get_global_hook_runner() -> Optional[HookRunner]:
    """Get the installed runner, or None before bootstrap."""
    return _global_runner


def reset_global_hook_runner() -> None:
    set_global_hook_runner(None)
