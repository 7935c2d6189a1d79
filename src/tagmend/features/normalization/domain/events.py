"""
Summary: Change events emitted by the normalization pipeline.
Why: Give the coordinator and displays a typed record of what changed per field.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tagmend.shared.media_record import TagField


class ChangeKind(StrEnum):
    """Kinds of field changes the pipeline can make."""

    ENCODING_FIXED = "encoding-fixed"
    CLEANED = "cleaned"
    ZERO_PADDED = "zero-padded"
    FALLBACK_FILLED = "fallback-filled"


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """One change applied to one field.

    ``detail`` is the source charset label for ``encoding-fixed`` and the
    fallback origin (``filename`` or ``directory``) for ``fallback-filled``.
    """

    field: TagField
    kind: ChangeKind
    old_value: str
    new_value: str
    detail: str = ""

    def describe(self) -> str:
        """Return a one-line human readable description."""

        label = self.field.value.capitalize()
        match self.kind:
            case ChangeKind.ENCODING_FIXED:
                return f"{label}: {self.detail or 'unknown'} -> UTF-8"
            case ChangeKind.CLEANED:
                return f"{label} cleaned (removed domains/extensions)"
            case ChangeKind.ZERO_PADDED:
                return f"{label} zero-padded"
            case ChangeKind.FALLBACK_FILLED:
                return f"{label}={self.new_value!r} (from {self.detail or 'context'}, fallback)"


__all__ = ["ChangeEvent", "ChangeKind"]
