"""
Plugin hook discovery.

Plugins are Python scripts in a plugins directory that declare which hooks
they handle via a module-level HOOK_CONFIG dict.

Example plugin script:

    # plugins/footer_notes.py
    HOOK_CONFIG = {
        "plugin_id": "footer-notes",
        "description": "Append house rules to every system prompt",
        "hooks": [
            {"hook": "system_prompt_footer", "handler": "footer", "priority": 5},
        ],
    }

    async def footer(event):
        return {"append": "Be concise."}
"""

import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Optional

from pydantic import ValidationError

from superpack.core.hooks.events import HookName
from superpack.core.hooks.models import PluginHookConfig, Registration

logger = logging.getLogger(__name__)


def discover_plugin_hooks(plugins_dir: Path) -> list[Registration]:
    """Scan a plugins directory and build registrations from its scripts.

    Scripts that fail to load, declare no hooks, or are disabled are skipped
    with a log line; discovery itself never raises.
    """
    if not plugins_dir.is_dir():
        logger.info(f"No plugins directory found at {plugins_dir}")
        return []

    registrations: list[Registration] = []
    plugin_count = 0
    for plugin_file in sorted(plugins_dir.glob("*.py")):
        if plugin_file.name.startswith("_"):
            continue  # Skip __init__.py, private helpers

        try:
            found = _load_plugin(plugin_file)
        except Exception as e:
            logger.error(f"Failed to load plugin {plugin_file.name}: {e}")
            continue

        if found:
            registrations.extend(found)
            plugin_count += 1

    logger.info(
        f"Discovered {plugin_count} plugins with {len(registrations)} hook handlers"
    )
    return registrations


def _load_plugin(plugin_file: Path) -> list[Registration]:
    """Import one plugin script and turn its HOOK_CONFIG into registrations."""
    module = _import_script(plugin_file)
    if module is None:
        return []

    raw_config = getattr(module, "HOOK_CONFIG", None)
    if not raw_config or not isinstance(raw_config, dict):
        logger.warning(f"Plugin {plugin_file.stem} has no HOOK_CONFIG dict, skipping")
        return []

    try:
        config = PluginHookConfig(**raw_config)
    except ValidationError as e:
        logger.warning(f"Plugin {plugin_file.stem} has an invalid HOOK_CONFIG: {e}")
        return []

    if not config.enabled:
        logger.info(f"Plugin {plugin_file.stem} is disabled, skipping")
        return []

    plugin_id = config.plugin_id or plugin_file.stem
    registrations = []
    for entry in config.hooks:
        try:
            hook_name = HookName(entry.hook)
        except ValueError:
            logger.warning(f"Plugin {plugin_id} registers unknown hook {entry.hook!r}")
            continue

        handler = getattr(module, entry.handler, None)
        if not callable(handler):
            logger.warning(
                f"Plugin {plugin_id}: handler {entry.handler!r} for "
                f"{hook_name.value} is missing or not callable"
            )
            continue

        registrations.append(
            Registration(
                hook_name=hook_name,
                handler=handler,
                priority=entry.priority,
                plugin_id=plugin_id,
                source=str(plugin_file),
            )
        )

    if registrations:
        logger.info(
            f"Discovered plugin: {plugin_id} "
            f"(hooks: {', '.join(r.hook_name.value for r in registrations)})"
        )
    else:
        logger.warning(f"Plugin {plugin_id} has no usable hooks, skipping")
    return registrations


def _import_script(plugin_file: Path) -> Optional[ModuleType]:
    spec = importlib.util.spec_from_file_location(
        f"superpack_plugin_{plugin_file.stem}", plugin_file
    )
    if not spec or not spec.loader:
        return None

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
