"""
Registration store: handlers tagged with a hook name and priority.
"""

import logging
from typing import Iterable, Iterator, Optional

from superpack.core.hooks.events import HookName
from superpack.core.hooks.models import HookHandler, Registration

logger = logging.getLogger(__name__)


def sort_by_priority(registrations: Iterable[Registration]) -> list[Registration]:
    """Highest priority first. sorted() is stable, so ties keep registration order."""
    return sorted(registrations, key=lambda r: r.priority, reverse=True)


class HookRegistry:
    """Ordered, append-only collection of hook registrations.

    Handed to HookRunner at construction; the runner takes its own snapshot,
    so registering more handlers afterwards needs a new runner.
    """

    def __init__(self, registrations: Optional[Iterable[Registration]] = None):
        self._registrations: list[Registration] = list(registrations or ())

    def register(
        self,
        hook_name: HookName | str,
        handler: HookHandler,
        priority: int = 0,
        plugin_id: Optional[str] = None,
        source: Optional[str] = None,
    ) -> Registration:
        """Append one registration and return it."""
        registration = Registration(
            hook_name=hook_name,
            handler=handler,
            priority=priority,
            plugin_id=plugin_id,
            source=source,
        )
        self._registrations.append(registration)
        logger.debug(
            f"Registered {registration.label} for {registration.hook_name.value} "
            f"(priority {priority})"
        )
        return registration

    def add(self, registration: Registration) -> None:
        self._registrations.append(registration)

    def query(self, hook_name: HookName | str) -> list[Registration]:
        """Registrations for one hook, highest priority first."""
        name = HookName(hook_name)
        return sort_by_priority(r for r in self._registrations if r.hook_name == name)

    def has_handlers(self, hook_name: HookName | str) -> bool:
        name = HookName(hook_name)
        return any(r.hook_name == name for r in self._registrations)

    def count(self, hook_name: HookName | str | None = None) -> int:
        """Number of registrations, for one hook or overall."""
        if hook_name is None:
            return len(self._registrations)
        name = HookName(hook_name)
        return sum(1 for r in self._registrations if r.hook_name == name)

    def __iter__(self) -> Iterator[Registration]:
        return iter(self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)
