"""
Typed models for invocation outcomes and validated arguments.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """One violated field: ``{field, reason}``."""

    field: str
    reason: str

    def to_dict(self) -> dict:
        return {"field": self.field, "reason": self.reason}


@dataclass(frozen=True)
class Success:
    payload: Any = None

    ok = True


@dataclass(frozen=True)
class Failure:
    kind: str
    message: str
    details: tuple[FieldError, ...] = ()
    status: int | None = None

    ok = False

    @classmethod
    def from_error(cls, err) -> Failure:
        """Build a Failure from a WPEngineError (or any CliError)."""
        return cls(
            kind=getattr(err, "kind", "error"),
            message=str(err),
            details=tuple(getattr(err, "errors", ()) or ()),
            status=getattr(err, "status", None),
        )

    def detail_text(self) -> str:
        return ", ".join(f"{d.field}: {d.reason}" for d in self.details)


Outcome = Success | Failure


@dataclass(frozen=True)
class ValidatedArguments(Mapping):
    """Arguments that satisfy their schema. Built only by ``validation.validate``."""

    operation: str
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def __getitem__(self, key):
        return self.arguments[key]

    def __iter__(self):
        return iter(self.arguments)

    def __len__(self):
        return len(self.arguments)

    def to_dict(self) -> dict:
        return dict(self.arguments)
