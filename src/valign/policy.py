"""When to realign.

The host calls ``should_realign`` on every refontification or edit event.
Realigning while the user types makes the table jump under the cursor, so
plain insertion and deletion commands suppress it; an explicit request
always goes through.
"""

from __future__ import annotations

from typing import Iterable, Literal

from valign.settings import DEFAULT_NOT_ALIGN_AFTER, Settings

Trigger = Literal["fontify", "edit", "explicit"]


class InvocationPolicy:
    """Decide, per event, whether a region should be realigned."""

    def __init__(self, not_align_after: Iterable[str] = DEFAULT_NOT_ALIGN_AFTER) -> None:
        self._not_align_after = frozenset(not_align_after)

    @classmethod
    def from_settings(cls, settings: Settings) -> InvocationPolicy:
        return cls(settings.not_align_after)

    def suppresses(self, command: str | None) -> bool:
        return command is not None and command in self._not_align_after

    def should_realign(
        self,
        trigger: Trigger,
        prior_command: str | None,
        *,
        surface_available: bool = True,
    ) -> bool:
        # Measuring needs a realized surface, even for explicit requests.
        if not surface_available:
            return False
        if trigger == "explicit":
            return True
        return not self.suppresses(prior_command)
