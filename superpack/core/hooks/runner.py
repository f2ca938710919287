"""
Hook runner: dispatches registered handlers for each hook name.

Each hook name is bound (see specs.py) to one execution model:

    MODIFYING        handlers run in priority order, each sees the previous
                     handler's output; boolean flags are OR-ed
    ACCUMULATING     handlers run in priority order, non-empty fragments
                     are joined with newlines
    FIRE_AND_FORGET  handlers run concurrently; resolves once all settle
    BLOCKING         handlers run in priority order until one blocks
    SEQUENTIAL_VOID  handlers run in priority order, each awaited before
                     the next starts

A handler that raises, or returns something that does not validate as the
hook's result, is treated as having returned nothing. Faults are logged and
kept in a bounded buffer; they never reach the caller.

Example:

    runner = create_runner([
        Registration(HookName.SYSTEM_PROMPT_FOOTER, footer_handler, priority=10),
    ])
    if runner.has_hooks(HookName.SYSTEM_PROMPT_FOOTER):
        footer = await runner.run_system_prompt_footer(event)
"""

import asyncio
import inspect
import logging
import time
from collections import deque
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from superpack.core.hooks.events import ExecutionModel, HookName
from superpack.core.hooks.models import (
    BootstrapAfterEvent,
    BootstrapBeforeEvent,
    BootstrapBeforeResult,
    HookError,
    PromptFooterEvent,
    PromptFooterResult,
    Registration,
    SandboxReadyEvent,
    SkillsFilterEvent,
    SkillsFilterResult,
    SubagentValidateEvent,
    SubagentValidateResult,
    ToolsFilterEvent,
    ToolsFilterResult,
)
from superpack.core.hooks.registry import sort_by_priority
from superpack.core.hooks.specs import HookSpec, get_hook_spec
from superpack.lib.flags import flag
from superpack.lib.logger import diag

logger = logging.getLogger(__name__)

# Maximum recent errors to keep in memory
MAX_RECENT_ERRORS = 50

EventInput = BaseModel | Mapping[str, Any]


class HookRunner:
    """Runs the handlers registered for each hook name.

    The registrations are snapshotted at construction. Rebuilding the set of
    handlers means building a new runner.
    """

    def __init__(
        self,
        registrations: Iterable[Registration] = (),
        max_recent_errors: int = MAX_RECENT_ERRORS,
    ):
        grouped: dict[HookName, list[Registration]] = {}
        for registration in registrations:
            grouped.setdefault(registration.hook_name, []).append(registration)

        self._hooks: dict[HookName, tuple[Registration, ...]] = {
            name: tuple(sort_by_priority(regs)) for name, regs in grouped.items()
        }
        self._recent_errors: deque[HookError] = deque(maxlen=max_recent_errors)
        self._folds = {
            ExecutionModel.MODIFYING: self._run_modifying,
            ExecutionModel.ACCUMULATING: self._run_accumulating,
            ExecutionModel.FIRE_AND_FORGET: self._run_fire_and_forget,
            ExecutionModel.BLOCKING: self._run_blocking,
            ExecutionModel.SEQUENTIAL_VOID: self._run_sequential_void,
        }

    # -- Queries --

    def has_hooks(self, hook_name: HookName | str) -> bool:
        """True if any handler is registered for the hook."""
        return bool(self._hooks.get(HookName(hook_name)))

    def get_hook_count(self, hook_name: HookName | str | None = None) -> int:
        if hook_name is None:
            return sum(len(hooks) for hooks in self._hooks.values())
        return len(self._hooks.get(HookName(hook_name), ()))

    def get_hooks(self, hook_name: HookName | str) -> list[Registration]:
        """Registrations for one hook, in dispatch order."""
        return list(self._hooks.get(HookName(hook_name), ()))

    # -- Dispatch --

    async def run(self, hook_name: HookName | str, event: EventInput) -> Optional[BaseModel]:
        """Fire a hook and fold its handlers' results.

        Returns the hook's result model, or None for void hooks. With no
        handlers registered, returns the identity result straight away.

        A mapping event is only validated when there is something to run it
        through: with no handlers, a malformed mapping for an accumulating,
        blocking or void hook is not inspected and does not raise. Modifying
        hooks always validate it, since their identity result is read from it.
        """
        spec = get_hook_spec(hook_name)
        hooks = self._hooks.get(spec.name, ())
        if not hooks:
            return self._identity(spec, event)

        event = self._coerce_event(spec, event)
        diag(
            "dump_hook_events",
            "hooks",
            f"Firing {spec.name.value} ({spec.model.value}) -> "
            f"{', '.join(r.label for r in hooks)}",
        )

        result = await self._folds[spec.model](spec, hooks, event)

        if flag("dump_hook_events"):
            summary = result.model_dump(exclude_none=True) if result is not None else None
            diag("dump_hook_events", "hooks", f"{spec.name.value} returned {summary}")
        return result

    def _identity(self, spec: HookSpec, event: EventInput) -> Optional[BaseModel]:
        """The result of firing a hook that has no handlers."""
        if spec.result_type is None:
            return None
        if spec.model == ExecutionModel.MODIFYING:
            event = self._coerce_event(spec, event)
            return spec.result_type(
                **{f: getattr(event, f) for f in spec.mutable_fields},
                **{f: False for f in spec.flag_fields},
            )
        if spec.model == ExecutionModel.ACCUMULATING:
            return spec.result_type(**{spec.fragment_field: ""})
        return spec.result_type()

    @staticmethod
    def _coerce_event(spec: HookSpec, event: EventInput) -> BaseModel:
        if isinstance(event, spec.event_type):
            return event
        return spec.event_type.model_validate(event)

    async def _invoke(
        self, spec: HookSpec, registration: Registration, event: BaseModel
    ) -> Optional[BaseModel]:
        """Call one handler with fault isolation. Returns its result, or None."""
        started = time.perf_counter()
        try:
            raw = registration.handler(event)
            if inspect.isawaitable(raw):
                raw = await raw
        except Exception as e:
            logger.error(
                f"Hook handler {registration.label} failed for {spec.name.value}: {e}"
            )
            self._record_error(spec.name.value, registration.plugin_id, str(e))
            return None
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            diag(
                "dump_hook_timing",
                "hooks",
                f"{spec.name.value}: {registration.label} took {elapsed_ms:.1f}ms",
            )
        return self._coerce_result(spec, registration, raw)

    @staticmethod
    def _coerce_result(
        spec: HookSpec, registration: Registration, raw: Any
    ) -> Optional[BaseModel]:
        if raw is None or spec.result_type is None:
            return None
        if isinstance(raw, spec.result_type):
            return raw
        if isinstance(raw, BaseModel):
            # e.g. event.model_copy(update=...): read the fields it carries
            raw = raw.model_dump()
        try:
            return spec.result_type.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                f"Ignoring malformed result from {registration.label} "
                f"for {spec.name.value}: {e.error_count()} validation error(s)"
            )
            return None

    # -- Execution models --

    async def _run_modifying(self, spec, hooks, event):
        current = {f: getattr(event, f) for f in spec.mutable_fields}
        flags = {f: False for f in spec.flag_fields}

        for registration in hooks:
            view = event.model_copy(update=current)
            result = await self._invoke(spec, registration, view)
            if result is None:
                continue
            for f in spec.mutable_fields:
                value = getattr(result, f)
                if f in result.model_fields_set and value is not None:
                    current[f] = value
            # Once set, a flag stays set for the rest of the chain
            for f in spec.flag_fields:
                if getattr(result, f):
                    flags[f] = True

        return spec.result_type(**current, **flags)

    async def _run_accumulating(self, spec, hooks, event):
        parts: list[str] = []
        for registration in hooks:
            result = await self._invoke(spec, registration, event)
            if result is None:
                continue
            fragment = getattr(result, spec.fragment_field)
            if fragment:
                parts.append(fragment)
        return spec.result_type(**{spec.fragment_field: spec.separator.join(parts)})

    async def _run_fire_and_forget(self, spec, hooks, event):
        await asyncio.gather(*(self._invoke(spec, r, event) for r in hooks))
        return None

    async def _run_blocking(self, spec, hooks, event):
        for registration in hooks:
            result = await self._invoke(spec, registration, event)
            if result is not None and getattr(result, spec.decision_field):
                logger.info(
                    f"Hook {spec.name.value} blocked by {registration.label}: "
                    f"{getattr(result, 'reason', None) or 'no reason given'}"
                )
                return result
        return spec.result_type()

    async def _run_sequential_void(self, spec, hooks, event):
        for registration in hooks:
            await self._invoke(spec, registration, event)
        return None

    # -- Typed entry points --

    async def run_system_prompt_tools_filter(
        self, event: ToolsFilterEvent | Mapping[str, Any]
    ) -> ToolsFilterResult:
        return await self.run(HookName.SYSTEM_PROMPT_TOOLS_FILTER, event)

    async def run_system_prompt_skills_filter(
        self, event: SkillsFilterEvent | Mapping[str, Any]
    ) -> SkillsFilterResult:
        return await self.run(HookName.SYSTEM_PROMPT_SKILLS_FILTER, event)

    async def run_system_prompt_footer(
        self, event: PromptFooterEvent | Mapping[str, Any]
    ) -> PromptFooterResult:
        return await self.run(HookName.SYSTEM_PROMPT_FOOTER, event)

    async def run_workspace_bootstrap_before(
        self, event: BootstrapBeforeEvent | Mapping[str, Any]
    ) -> BootstrapBeforeResult:
        return await self.run(HookName.WORKSPACE_BOOTSTRAP_BEFORE, event)

    async def run_workspace_bootstrap_after(
        self, event: BootstrapAfterEvent | Mapping[str, Any]
    ) -> None:
        await self.run(HookName.WORKSPACE_BOOTSTRAP_AFTER, event)

    async def run_subagent_prompt_validate(
        self, event: SubagentValidateEvent | Mapping[str, Any]
    ) -> SubagentValidateResult:
        return await self.run(HookName.SUBAGENT_PROMPT_VALIDATE, event)

    async def run_sandbox_workspace_ready(
        self, event: SandboxReadyEvent | Mapping[str, Any]
    ) -> None:
        await self.run(HookName.SANDBOX_WORKSPACE_READY, event)

    # -- Introspection --

    def _record_error(self, hook_name: str, plugin_id: Optional[str], error: str) -> None:
        """Record a handler fault for introspection."""
        self._recent_errors.append(
            HookError(
                hook_name=hook_name,
                plugin_id=plugin_id,
                error=error,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )

    def get_registered_hooks(self) -> list[dict]:
        """Return all registrations, grouped by hook in dispatch order."""
        return [r.to_dict() for hooks in self._hooks.values() for r in hooks]

    def get_recent_errors(self) -> list[dict]:
        return [e.to_dict() for e in self._recent_errors]

    def health_info(self) -> dict:
        """Return hook health info."""
        plugins = {r.plugin_id for hooks in self._hooks.values() for r in hooks if r.plugin_id}
        return {
            "handlers_count": self.get_hook_count(),
            "plugins_count": len(plugins),
            "hooks_registered": [name.value for name in self._hooks],
            "recent_errors_count": len(self._recent_errors),
        }


def create_runner(
    registrations: Iterable[Registration] = (),
    max_recent_errors: int = MAX_RECENT_ERRORS,
) -> HookRunner:
    """Build a runner over a fixed set of registrations."""
    return HookRunner(registrations, max_recent_errors=max_recent_errors)
