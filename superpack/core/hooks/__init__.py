"""
Plugin hooks for superpack.

Plugins register handlers against a closed set of hook names; HookRunner
fires them with the execution model bound to each name.
"""

from superpack.core.hooks.events import ExecutionModel, HookName
from superpack.core.hooks.global_runner import (
    get_global_hook_runner,
    reset_global_hook_runner,
    set_global_hook_runner,
)
from superpack.core.hooks.models import (
    BootstrapAfterEvent,
    BootstrapBeforeEvent,
    BootstrapBeforeResult,
    BootstrapFile,
    HookError,
    PromptFooterEvent,
    PromptFooterResult,
    Registration,
    SandboxReadyEvent,
    SkillsFilterEvent,
    SkillsFilterResult,
    SubagentValidateEvent,
    SubagentValidateResult,
    ToolEntry,
    ToolsFilterEvent,
    ToolsFilterResult,
)
from superpack.core.hooks.registry import HookRegistry
from superpack.core.hooks.runner import HookRunner, create_runner
from superpack.core.hooks.specs import HOOK_SPECS, HookSpec, get_hook_spec

__all__ = [
    "BootstrapAfterEvent",
    "BootstrapBeforeEvent",
    "BootstrapBeforeResult",
    "BootstrapFile",
    "ExecutionModel",
    "HOOK_SPECS",
    "HookError",
    "HookName",
    "HookRegistry",
    "HookRunner",
    "HookSpec",
    "PromptFooterEvent",
    "PromptFooterResult",
    "Registration",
    "SandboxReadyEvent",
    "SkillsFilterEvent",
    "SkillsFilterResult",
    "SubagentValidateEvent",
    "SubagentValidateResult",
    "ToolEntry",
    "ToolsFilterEvent",
    "ToolsFilterResult",
    "create_runner",
    "get_global_hook_runner",
    "get_hook_spec",
    "reset_global_hook_runner",
    "set_global_hook_runner",
]
