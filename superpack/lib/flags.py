"""
Diagnostic feature flags.

Independent of log levels. Toggle specific diagnostic outputs.
Set via:
  - env: SUPERPACK_FLAGS=dump_system_prompt,dump_bootstrap_files
  - env: SUPERPACK_PRESET=debug_prompts
  - config: diag_flags: ["dump_system_prompt"]
  - config: diag_preset: "debug_prompts"
"""

import logging
import os
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

FLAGS: dict[str, str] = {
    # Prompt diagnostics
    "dump_system_prompt": "Log full system prompt on every build",
    "dump_system_prompt_diff": "Log diff when system prompt changes between runs",
    "dump_bootstrap_files": "Log which workspace files loaded, filtered, injected",
    "dump_skills_resolution": "Log skill discovery and <available_skills> content",
    "dump_subagent_prompt": "Log full prompt for every subagent spawn with agentId",
    # Tool diagnostics
    "dump_tool_resolution": "Log which tools passed policy filter and why",
    "dump_tool_calls": "Log every tool call name + params before execution",
    "dump_tool_results": "Log tool results after execution",
    # Workspace diagnostics
    "dump_sandbox_copy": "Log every file copied to subagent sandbox with content hash",
    "dump_template_writes": "Log when template .md files are written or skipped",
    # Hook diagnostics
    "dump_hook_events": "Log every hook fired, handlers invoked, results returned",
    "dump_hook_timing": "Log execution time for each hook handler",
    # Model diagnostics
    "dump_llm_payload": "Log full LLM request payload (system + messages)",
    "dump_llm_response": "Log full LLM response content",
}

ALL_FLAG_NAMES: tuple[str, ...] = tuple(FLAGS)

PRESETS: dict[str, tuple[str, ...]] = {
    "debug_prompts": (
        "dump_system_prompt",
        "dump_system_prompt_diff",
        "dump_bootstrap_files",
        "dump_skills_resolution",
        "dump_subagent_prompt",
    ),
    "debug_tools": (
        "dump_tool_resolution",
        "dump_tool_calls",
        "dump_tool_results",
        "dump_hook_events",
    ),
    "debug_workspace": (
        "dump_bootstrap_files",
        "dump_sandbox_copy",
        "dump_template_writes",
    ),
    "debug_hooks": (
        "dump_hook_events",
        "dump_hook_timing",
    ),
    "debug_llm": (
        "dump_llm_payload",
        "dump_llm_response",
    ),
    "debug_all": ALL_FLAG_NAMES,
}

_active: Optional[frozenset[str]] = None
_config_flags: tuple[str, ...] = ()
_config_preset: Optional[str] = None


def set_config_flags(
    flags: Optional[Iterable[str]] = None, preset: Optional[str] = None
) -> None:
    """Inject config-driven flags. Can be called again to update at runtime."""
    global _config_flags, _config_preset, _active

    known = []
    for name in flags or ():
        if name in FLAGS:
            known.append(name)
        else:
            logger.warning(f"Ignoring unknown diagnostic flag: {name}")
    _config_flags = tuple(known)

    if preset and preset not in PRESETS:
        logger.warning(f"Ignoring unknown diagnostic preset: {preset}")
        preset = None
    _config_preset = preset
    _active = None


def _resolve() -> frozenset[str]:
    global _active
    if _active is not None:
        return _active

    result: set[str] = set()

    if _config_preset:
        result.update(PRESETS[_config_preset])
    result.update(_config_flags)

    env_preset = os.environ.get("SUPERPACK_PRESET", "").strip()
    if env_preset in PRESETS:
        result.update(PRESETS[env_preset])

    env_flags = os.environ.get("SUPERPACK_FLAGS", "").strip()
    if env_flags:
        for raw in env_flags.split(","):
            name = raw.strip()
            if name in FLAGS:
                result.add(name)

    _active = frozenset(result)
    return _active


def flag(name: str) -> bool:
    """Check if a specific flag is active."""
    return name in _resolve()


def active_flags() -> list[str]:
    """Get all active flags, in declaration order."""
    resolved = _resolve()
    return [name for name in ALL_FLAG_NAMES if name in resolved]


def reset_flags() -> None:
    """Drop the cached resolution (tests, runtime config reload)."""
    global _active
    _active = None
