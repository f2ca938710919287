"""
Pytest configuration and fixtures.
"""

import os
import tempfile
from pathlib import Path

import pytest

# Set test environment before superpack.config builds its global settings
os.environ["SUPERPACK_CONFIG"] = str(
    Path(tempfile.mkdtemp(prefix="superpack-test-")) / "superpack.yaml"
)
os.environ["SUPERPACK_LOG_LEVEL"] = "WARNING"
os.environ.pop("SUPERPACK_FLAGS", None)
os.environ.pop("SUPERPACK_PRESET", None)


@pytest.fixture(autouse=True)
def clean_hook_state():
    """Reset diagnostic flags and the global runner around each test."""
    from superpack.core.hooks.global_runner import reset_global_hook_runner
    from superpack.lib.flags import reset_flags, set_config_flags

    set_config_flags()
    reset_flags()
    reset_global_hook_runner()
    yield
    set_config_flags()
    reset_flags()
    reset_global_hook_runner()


@pytest.fixture
def plugins_dir(tmp_path: Path) -> Path:
    """Create an empty plugins directory."""
    path = tmp_path / "plugins"
    path.mkdir()
    return path


@pytest.fixture
def tools_event():
    from superpack.core.hooks.models import ToolEntry, ToolsFilterEvent

    return ToolsFilterEvent(
        agent_id="main",
        prompt_mode="full",
        tools=[
            ToolEntry(name="exec", description="Run shell commands"),
            ToolEntry(name="read", description="Read files"),
        ],
    )


@pytest.fixture
def footer_event():
    from superpack.core.hooks.models import PromptFooterEvent

    return PromptFooterEvent(
        agent_id="main", prompt_mode="full", current_prompt="You are an assistant."
    )


@pytest.fixture
def bootstrap_before_event():
    from superpack.core.hooks.models import BootstrapBeforeEvent, BootstrapFile

    return BootstrapBeforeEvent(
        workspace_dir="/workspace/main",
        files=[
            BootstrapFile(name="AGENTS.md", content="# Agents"),
            BootstrapFile(name="SOUL.md", content="# Soul"),
        ],
        is_new_workspace=True,
    )


@pytest.fixture
def validate_event():
    from superpack.core.hooks.models import SubagentValidateEvent

    return SubagentValidateEvent(
        agent_id="researcher",
        parent_agent_id="main",
        system_prompt="You research things.",
        session_key="agent:main:subagent:1",
    )


@pytest.fixture
def sandbox_event():
    from superpack.core.hooks.models import SandboxReadyEvent

    return SandboxReadyEvent(
        workspace_dir="/sandboxes/abc",
        agent_workspace_dir="/workspace/researcher",
        agent_id="researcher",
        session_key="agent:main:subagent:1",
        scope_key="session",
    )


@pytest.fixture
def bootstrap_after_event():
    from superpack.core.hooks.models import BootstrapAfterEvent

    return BootstrapAfterEvent(
        workspace_dir="/workspace/main",
        files_written=["AGENTS.md"],
        files_skipped=["SOUL.md"],
    )
