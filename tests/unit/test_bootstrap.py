"""Tests for process-boundary wiring and the global runner accessor."""

import pytest

from superpack.bootstrap import bootstrap
from superpack.config import Settings
from superpack.core.hooks.events import HookName
from superpack.core.hooks.global_runner import (
    get_global_hook_runner,
    reset_global_hook_runner,
    set_global_hook_runner,
)
from superpack.core.hooks.models import Registration
from superpack.core.hooks.runner import create_runner
from superpack.lib.flags import flag


@pytest.fixture
def settings(tmp_path, plugins_dir):
    return Settings(
        plugins_dir=plugins_dir,
        max_recent_errors=3,
        diag_flags=["dump_hook_timing"],
        log_level="WARNING",
    )


class TestGlobalRunner:
    def test_none_before_bootstrap(self):
        assert get_global_hook_runner() is None

    def test_set_and_reset(self):
        runner = create_runner([])
        set_global_hook_runner(runner)
        assert get_global_hook_runner() is runner
        reset_global_hook_runner()
        assert get_global_hook_runner() is None


class TestBootstrap:
    def test_installs_global_runner(self, settings):
        runner = bootstrap(settings, configure_logging=False)
        assert get_global_hook_runner() is runner
        assert runner.get_hook_count() == 0

    def test_applies_config_flags(self, settings):
        bootstrap(settings, configure_logging=False)
        assert flag("dump_hook_timing") is True

    def test_explicit_registrations(self, settings):
        registrations = [
            Registration(HookName.SYSTEM_PROMPT_FOOTER, lambda e: None, plugin_id="inline")
        ]
        runner = bootstrap(settings, registrations=registrations, configure_logging=False)
        assert runner.has_hooks(HookName.SYSTEM_PROMPT_FOOTER)

    def test_discovers_plugins(self, settings, plugins_dir):
        (plugins_dir / "notes.py").write_text(
            "HOOK_CONFIG = {'hooks': [{'hook': 'system_prompt_footer', 'handler': 'f'}]}\n"
            "def f(event):\n    return {'append': 'note'}\n"
        )
        runner = bootstrap(settings, configure_logging=False)
        assert runner.get_hook_count(HookName.SYSTEM_PROMPT_FOOTER) == 1

    def test_no_plugins_dir(self):
        runner = bootstrap(Settings(plugins_dir=None), configure_logging=False)
        assert runner.get_hook_count() == 0

    @pytest.mark.asyncio
    async def test_error_buffer_size_from_settings(self, settings, footer_event):
        def boom(event):
            raise RuntimeError("x")

        registrations = [
            Registration(HookName.SYSTEM_PROMPT_FOOTER, boom) for _ in range(5)
        ]
        runner = bootstrap(settings, registrations=registrations, configure_logging=False)
        await runner.run_system_prompt_footer(footer_event)
        assert len(runner.get_recent_errors()) == 3
