"""Abstract full-text index interface.

Defines the surface the search pipeline needs from an index (execute a
structured query, return raw matches) so the Whoosh gateway can be swapped
for a fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Mapping, Tuple

from docsearch.search.query import StructuredQuery

# (start offset, length) of one matched term occurrence
Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class RawMatch:
    """A document matched by the index, with per-field term positions."""

    ref: str
    score: float = 0.0
    fields: Mapping[str, Tuple[Position, ...]] = field(default_factory=dict)

    def positions(self, fieldname: str) -> Tuple[Position, ...]:
        """Positions recorded for a field; empty when the field did not match."""
        return tuple(self.fields.get(fieldname) or ())


class BaseIndex(ABC):
    """Abstract interface for loaded full-text indexes."""

    @abstractmethod
    def execute(self, query: StructuredQuery) -> List[RawMatch]:
        """Run a structured query and return matches, best score first."""
        raise NotImplementedError
