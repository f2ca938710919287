"""
Hook name taxonomy.

Every extension point the host can fire, and the execution models that
decide how a hook's handlers are run and folded.
"""

from enum import Enum


class HookName(str, Enum):
    """Extension points that plugins can register handlers for."""

    # System prompt assembly
    SYSTEM_PROMPT_TOOLS_FILTER = "system_prompt_tools_filter"
    SYSTEM_PROMPT_SKILLS_FILTER = "system_prompt_skills_filter"
    SYSTEM_PROMPT_FOOTER = "system_prompt_footer"

    # Workspace bootstrap
    WORKSPACE_BOOTSTRAP_BEFORE = "workspace_bootstrap_before"
    WORKSPACE_BOOTSTRAP_AFTER = "workspace_bootstrap_after"

    # Subagent spawn
    SUBAGENT_PROMPT_VALIDATE = "subagent_prompt_validate"

    # Sandbox lifecycle
    SANDBOX_WORKSPACE_READY = "sandbox_workspace_ready"


class ExecutionModel(str, Enum):
    """How the handlers of one hook are run and their outcomes folded."""

    # Chain: each handler sees the previous handler's output
    MODIFYING = "modifying"
    # Each handler contributes a fragment, joined in priority order
    ACCUMULATING = "accumulating"
    # Concurrent notification, nothing returned
    FIRE_AND_FORGET = "fire_and_forget"
    # First handler that blocks wins, remaining handlers are skipped
    BLOCKING = "blocking"
    # Notification where each handler completes before the next starts
    SEQUENTIAL_VOID = "sequential_void"


# Models where the caller receives nothing back
VOID_MODELS = {
    ExecutionModel.FIRE_AND_FORGET,
    ExecutionModel.SEQUENTIAL_VOID,
}
