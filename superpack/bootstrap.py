"""
Process-boundary wiring.

Called once by the host application at startup: configures logging and
diagnostic flags from settings, builds the hook runner over the discovered
plugins and installs it as the global runner.
"""

import logging
from typing import Iterable, Optional

from superpack.config import Settings, get_settings
from superpack.core.hooks.events import HookName
from superpack.core.hooks.global_runner import set_global_hook_runner
from superpack.core.hooks.models import Registration
from superpack.core.hooks.runner import HookRunner, create_runner
from superpack.core.plugins import discover_plugin_hooks
from superpack.lib.flags import active_flags, set_config_flags
from superpack.lib.logger import diag_list, setup_logging

logger = logging.getLogger(__name__)


def bootstrap(
    settings: Optional[Settings] = None,
    registrations: Optional[Iterable[Registration]] = None,
    configure_logging: bool = True,
) -> HookRunner:
    """Build the process-wide hook runner.

    Args:
        settings: Settings to use (defaults to the global settings)
        registrations: Explicit registrations. If None, plugins are
            discovered from settings.plugins_dir.
        configure_logging: Whether to (re)configure the root logger

    Returns:
        The installed runner
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)

    set_config_flags(settings.diag_flags, settings.diag_preset)
    flags = active_flags()
    if flags:
        logger.info(f"Diagnostic flags active: {', '.join(flags)}")

    if registrations is None:
        registrations = (
            discover_plugin_hooks(settings.plugins_dir) if settings.plugins_dir else []
        )

    registrations = list(registrations)
    diag_list(
        "dump_hook_events",
        "hooks",
        "Registered hook handlers",
        [f"{r.hook_name.value} <- {r.label} (priority {r.priority})" for r in registrations],
    )

    runner = create_runner(registrations, max_recent_errors=settings.max_recent_errors)
    set_global_hook_runner(runner)
    _log_banner(runner)
    return runner


def _log_banner(runner: HookRunner) -> None:
    """Log which hooks have handlers."""
    active = [
        f"{name.value} ({runner.get_hook_count(name)})"
        for name in HookName
        if runner.has_hooks(name)
    ]
    if active:
        logger.info(f"Hook runner ready: {', '.join(active)}")
    else:
        logger.info("Hook runner ready: no hooks registered")
