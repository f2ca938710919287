"""
Hook event, result and registration models.

Events are frozen: handlers of modifying hooks get a fresh copy carrying the
running state instead of mutating the caller's event.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, Field

from superpack.core.hooks.events import HookName

_EVENT_CONFIG = {"populate_by_name": True, "frozen": True}
_RESULT_CONFIG = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Shared payloads
# ---------------------------------------------------------------------------


class ToolEntry(BaseModel):
    """A tool as listed in the system prompt."""

    name: str
    description: Optional[str] = None


class BootstrapFile(BaseModel):
    """A template file about to be written into a workspace."""

    name: str
    content: str


# ---------------------------------------------------------------------------
# system_prompt_tools_filter
# ---------------------------------------------------------------------------


class ToolsFilterEvent(BaseModel):
    agent_id: str = Field(alias="agentId")
    prompt_mode: str = Field(alias="promptMode")
    tools: list[ToolEntry] = Field(default_factory=list)

    model_config = _EVENT_CONFIG


class ToolsFilterResult(BaseModel):
    tools: Optional[list[ToolEntry]] = None

    model_config = _RESULT_CONFIG


# ---------------------------------------------------------------------------
# system_prompt_skills_filter
# ---------------------------------------------------------------------------


class SkillsFilterEvent(BaseModel):
    agent_id: str = Field(alias="agentId")
    prompt_mode: str = Field(alias="promptMode")
    skills_prompt: str = Field(alias="skillsPrompt", default="")

    model_config = _EVENT_CONFIG


class SkillsFilterResult(BaseModel):
    skills_prompt: Optional[str] = Field(alias="skillsPrompt", default=None)

    model_config = _RESULT_CONFIG


# ---------------------------------------------------------------------------
# system_prompt_footer
# ---------------------------------------------------------------------------


class PromptFooterEvent(BaseModel):
    agent_id: str = Field(alias="agentId")
    prompt_mode: str = Field(alias="promptMode")
    current_prompt: str = Field(alias="currentPrompt", default="")

    model_config = _EVENT_CONFIG


class PromptFooterResult(BaseModel):
    append: str = ""

    model_config = _RESULT_CONFIG


# ---------------------------------------------------------------------------
# workspace_bootstrap_before / workspace_bootstrap_after
# ---------------------------------------------------------------------------


class BootstrapBeforeEvent(BaseModel):
    workspace_dir: str = Field(alias="workspaceDir")
    files: list[BootstrapFile] = Field(default_factory=list)
    is_new_workspace: bool = Field(alias="isNewWorkspace", default=False)

    model_config = _EVENT_CONFIG


class BootstrapBeforeResult(BaseModel):
    files: Optional[list[BootstrapFile]] = None
    skip: bool = False

    model_config = _RESULT_CONFIG


class BootstrapAfterEvent(BaseModel):
    workspace_dir: str = Field(alias="workspaceDir")
    files_written: list[str] = Field(alias="filesWritten", default_factory=list)
    files_skipped: list[str] = Field(alias="filesSkipped", default_factory=list)

    model_config = _EVENT_CONFIG


# ---------------------------------------------------------------------------
# subagent_prompt_validate
# ---------------------------------------------------------------------------


class SubagentValidateEvent(BaseModel):
    agent_id: str = Field(alias="agentId")
    parent_agent_id: str = Field(alias="parentAgentId")
    system_prompt: str = Field(alias="systemPrompt")
    session_key: str = Field(alias="sessionKey")

    model_config = _EVENT_CONFIG


class SubagentValidateResult(BaseModel):
    block: bool = False
    reason: Optional[str] = None

    model_config = _RESULT_CONFIG


# ---------------------------------------------------------------------------
# sandbox_workspace_ready
# ---------------------------------------------------------------------------


class SandboxReadyEvent(BaseModel):
    workspace_dir: str = Field(alias="workspaceDir")
    agent_workspace_dir: str = Field(alias="agentWorkspaceDir")
    agent_id: str = Field(alias="agentId")
    session_key: str = Field(alias="sessionKey")
    scope_key: str = Field(alias="scopeKey")

    model_config = _EVENT_CONFIG


# ---------------------------------------------------------------------------
# Registrations
# ---------------------------------------------------------------------------

HookHandler = Callable[[Any], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class Registration:
    """One handler registered against one hook name."""

    hook_name: HookName
    handler: HookHandler
    priority: int = 0
    plugin_id: Optional[str] = None
    source: Optional[str] = None

    def __post_init__(self):
        # Raises ValueError for names outside the HookName set
        object.__setattr__(self, "hook_name", HookName(self.hook_name))
        if not callable(self.handler):
            raise TypeError(f"Handler for {self.hook_name.value} is not callable")

    @property
    def label(self) -> str:
        """Name used in diagnostics: plugin id, else the handler's name."""
        if self.plugin_id:
            return self.plugin_id
        return getattr(self.handler, "__qualname__", repr(self.handler))

    def to_dict(self) -> dict:
        """Serialize for introspection."""
        return {
            "hook_name": self.hook_name.value,
            "plugin_id": self.plugin_id,
            "handler": getattr(self.handler, "__qualname__", repr(self.handler)),
            "priority": self.priority,
            "source": self.source,
        }


@dataclass
class HookError:
    """Record of a handler fault."""

    hook_name: str
    plugin_id: Optional[str]
    error: str
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "hook_name": self.hook_name,
            "plugin_id": self.plugin_id,
            "error": self.error,
            "timestamp": self.timestamp,
        }


# ---------------------------------------------------------------------------
# Plugin script configuration
# ---------------------------------------------------------------------------


class PluginHookEntry(BaseModel):
    """One `HOOK_CONFIG["hooks"]` entry in a plugin script."""

    hook: str
    handler: str
    priority: int = 0


class PluginHookConfig(BaseModel):
    """The module-level `HOOK_CONFIG` dict of a plugin script."""

    plugin_id: Optional[str] = None
    enabled: bool = True
    description: str = ""
    hooks: list[PluginHookEntry] = Field(default_factory=list)
