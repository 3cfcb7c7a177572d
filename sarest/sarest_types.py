"""Value objects passed between the sarest components.

parser -> QuerySpec -> compiler -> Criteria -> store -> ResultPage -> response
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False

    def __str__(self) -> str:
        return f"-{self.field}" if self.descending else self.field


@dataclass(frozen=True)
class QuerySpec:
    """Parsed list request arguments.

    Only attributes declared on the model occur in ``equality_filters`` and ``sort_keys``.
    ``count`` is None when the number of returned records is unbounded.
    """

    equality_filters: Mapping[str, tuple] = field(default_factory=dict)
    generic_search: Optional[str] = None
    offset: int = 0
    count: Optional[int] = None
    sort_keys: tuple[SortKey, ...] = ()


@dataclass(frozen=True)
class SearchClause:
    """Substring ``token`` matched against any of ``fields``"""

    token: str
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class Criteria:
    """Store-agnostic query instructions

    - ``equals``: (attribute, values) pairs, all of them must match
    - ``search``: optional disjunction, ANDed with ``equals``
    - ``order``: composite sort, applied in sequence
    - ``limit``: None means no limit
    """

    equals: tuple[tuple[str, tuple], ...] = ()
    search: Optional[SearchClause] = None
    order: tuple[SortKey, ...] = ()
    offset: int = 0
    limit: Optional[int] = None


@dataclass(frozen=True)
class ResultPage:
    records: Sequence[Any]
    total: int
    range_start: int = 0
    range_end: int = 0

    @classmethod
    def from_slice(cls, records: Sequence[Any], total: int, offset: int) -> "ResultPage":
        """
        :param records: the records that were fetched, starting at `offset`
        :param total: number of records matching the filters before offset and limit were applied
        :param offset: index of the first record in the full result set
        """
        records = list(records)
        if not records:
            return cls(records, total, 0, 0)
        return cls(records, total, offset, offset + len(records) - 1)

    @property
    def content_range(self) -> str:
        return f"items {self.range_start}-{self.range_end}/{self.total}"


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ResourceDescriptor:
    """Endpoint configuration of an exposed model, created when the resource is registered"""

    plural: str
    singular: str
    model: Any = field(compare=False)

    @property
    def endpoints(self) -> dict[str, str]:
        return {"plural": self.plural, "singular": self.singular}
