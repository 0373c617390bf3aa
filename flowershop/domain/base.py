"""Building blocks shared by the catalog's domain types.

Catalog ids and attribute groups are values, stores and admins are
entities, and a product is the aggregate that owns its composition edges
and remembers what happened to it until the service has committed.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import ClassVar, Generic, TypeVar


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable value compared field by field."""


IdT = TypeVar("IdT", bound=ValueObject)


@dataclass
class Entity(ABC, Generic[IdT]):
    """Catalog object with an identity.

    Equality and hashing use only ``id``, so a reloaded store or admin
    compares equal to the one already held by the caller.
    """

    id: IdT

    def __eq__(self, other: object) -> bool:
        return isinstance(other, type(self)) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


@dataclass(frozen=True, kw_only=True)
class DomainEvent(ABC):
    """Something that happened to an aggregate.

    Subclasses set ``event_type``, the dotted name written to the log.
    """

    event_type: ClassVar[str]

    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(kw_only=True)
class AggregateRoot(Entity[IdT], Generic[IdT]):
    """Entity that owns other catalog objects.

    ``version`` starts at 1 and goes up with every change made after
    creation. Events wait in ``pending_events`` until collected.
    """

    version: int = field(default=1, compare=False)
    created_at: datetime = field(default_factory=utcnow, compare=False)
    updated_at: datetime = field(default_factory=utcnow, compare=False)
    pending_events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def record(self, event: DomainEvent) -> None:
        self.pending_events.append(event)

    def mark_changed(self) -> None:
        self.updated_at = utcnow()
        self.version += 1

    def collect_events(self) -> list[DomainEvent]:
        """Hand over the pending events and forget them."""
        events, self.pending_events = self.pending_events, []
        return events
