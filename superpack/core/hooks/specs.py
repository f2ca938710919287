"""
Per-hook dispatch table.

Binds each HookName to one execution model plus its event and result shapes.
Adding a hook is a table edit here and an enum member in events.py.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from superpack.core.hooks.events import ExecutionModel, HookName
from superpack.core.hooks.models import (
    BootstrapAfterEvent,
    BootstrapBeforeEvent,
    BootstrapBeforeResult,
    PromptFooterEvent,
    PromptFooterResult,
    SandboxReadyEvent,
    SkillsFilterEvent,
    SkillsFilterResult,
    SubagentValidateEvent,
    SubagentValidateResult,
    ToolsFilterEvent,
    ToolsFilterResult,
)


@dataclass(frozen=True)
class HookSpec:
    """Execution model and payload shapes for one hook name.

    mutable_fields: fields threaded through a MODIFYING chain.
    flag_fields: booleans OR-ed across a MODIFYING chain.
    fragment_field: the string each ACCUMULATING handler contributes.
    decision_field: the truthy field that stops a BLOCKING chain.
    """

    name: HookName
    model: ExecutionModel
    event_type: type[BaseModel]
    result_type: Optional[type[BaseModel]] = None
    mutable_fields: tuple[str, ...] = ()
    flag_fields: tuple[str, ...] = ()
    fragment_field: Optional[str] = None
    decision_field: Optional[str] = None
    separator: str = "\n"


HOOK_SPECS: dict[HookName, HookSpec] = {
    HookName.SYSTEM_PROMPT_TOOLS_FILTER: HookSpec(
        name=HookName.SYSTEM_PROMPT_TOOLS_FILTER,
        model=ExecutionModel.MODIFYING,
        event_type=ToolsFilterEvent,
        result_type=ToolsFilterResult,
        mutable_fields=("tools",),
    ),
    HookName.SYSTEM_PROMPT_SKILLS_FILTER: HookSpec(
        name=HookName.SYSTEM_PROMPT_SKILLS_FILTER,
        model=ExecutionModel.MODIFYING,
        event_type=SkillsFilterEvent,
        result_type=SkillsFilterResult,
        mutable_fields=("skills_prompt",),
    ),
    HookName.SYSTEM_PROMPT_FOOTER: HookSpec(
        name=HookName.SYSTEM_PROMPT_FOOTER,
        model=ExecutionModel.ACCUMULATING,
        event_type=PromptFooterEvent,
        result_type=PromptFooterResult,
        fragment_field="append",
    ),
    HookName.WORKSPACE_BOOTSTRAP_BEFORE: HookSpec(
        name=HookName.WORKSPACE_BOOTSTRAP_BEFORE,
        model=ExecutionModel.MODIFYING,
        event_type=BootstrapBeforeEvent,
        result_type=BootstrapBeforeResult,
        mutable_fields=("files",),
        flag_fields=("skip",),
    ),
    HookName.WORKSPACE_BOOTSTRAP_AFTER: HookSpec(
        name=HookName.WORKSPACE_BOOTSTRAP_AFTER,
        model=ExecutionModel.FIRE_AND_FORGET,
        event_type=BootstrapAfterEvent,
    ),
    HookName.SUBAGENT_PROMPT_VALIDATE: HookSpec(
        name=HookName.SUBAGENT_PROMPT_VALIDATE,
        model=ExecutionModel.BLOCKING,
        event_type=SubagentValidateEvent,
        result_type=SubagentValidateResult,
        decision_field="block",
    ),
    HookName.SANDBOX_WORKSPACE_READY: HookSpec(
        name=HookName.SANDBOX_WORKSPACE_READY,
        model=ExecutionModel.SEQUENTIAL_VOID,
        event_type=SandboxReadyEvent,
    ),
}


def get_hook_spec(hook_name: "HookName | str") -> HookSpec:
    """Look up the spec for a hook name. Raises ValueError for unknown names."""
    return HOOK_SPECS[HookName(hook_name)]
