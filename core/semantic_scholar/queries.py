"""Search filters and bulk query syntax for the Semantic Scholar Graph API.

Bulk search takes a boolean query language; build it from nodes instead of
by string concatenation:

    query = (Term("fish") & Phrase("fish ladder")) | ~Prefix("salmon")
    str(query)  # 'fish + "fish ladder" | -salmon*'
"""

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from .errors import InvalidParameterError
from .types import FieldOfStudy, PublicationType, join_values

# YYYY, YYYY-MM or YYYY-MM-DD
_DATE_PREFIX = re.compile(r"^(\d{4})(?:-(\d{2})(?:-(\d{2}))?)?$")


@dataclass(frozen=True)
class YearRange:
    """Inclusive publication year range; either end may be open."""

    start: Optional[int] = None
    end: Optional[int] = None

    def __post_init__(self):
        if self.start is None and self.end is None:
            raise InvalidParameterError("year range needs a start or an end")
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvalidParameterError("start year must be less than or equal to end year")

    @classmethod
    def at(cls, year: int) -> "YearRange":
        return cls(year, year)

    @classmethod
    def since(cls, year: int) -> "YearRange":
        return cls(start=year)

    @classmethod
    def until(cls, year: int) -> "YearRange":
        return cls(end=year)

    def __str__(self) -> str:
        if self.start is not None and self.start == self.end:
            return str(self.start)
        start = "" if self.start is None else str(self.start)
        end = "" if self.end is None else str(self.end)
        return f"{start}-{end}"


def _check_date_prefix(value: str) -> str:
    match = _DATE_PREFIX.match(value)
    if not match:
        raise InvalidParameterError(f"Invalid date '{value}', expected YYYY[-MM[-DD]]")
    year, month, day = match.groups()
    try:
        date(int(year), int(month or 1), int(day or 1))
    except ValueError as e:
        raise InvalidParameterError(f"Invalid date '{value}': {e}") from e
    return value


@dataclass(frozen=True)
class DateRange:
    """Inclusive publication date range.

    Each end is a date or a prefix of one: ``2019-03-05``, ``2019-03`` or
    ``2019``. Papers with no known date count as published on January 1st
    of their year.
    """

    start: Optional[str] = None
    end: Optional[str] = None

    def __post_init__(self):
        if self.start is None and self.end is None:
            raise InvalidParameterError("date range needs a start or an end")
        for value in (self.start, self.end):
            if value is not None:
                _check_date_prefix(value)

    def __str__(self) -> str:
        return f"{self.start or ''}:{self.end or ''}"


@dataclass
class SearchFilters:
    """Filters shared by relevance, bulk and title-match search."""

    publication_types: list[PublicationType] = field(default_factory=list)
    open_access_pdf: bool = False
    min_citation_count: Optional[int] = None
    publication_date: Optional[DateRange] = None
    year: Optional[YearRange] = None
    fields_of_study: list[FieldOfStudy] = field(default_factory=list)
    venues: list[str] = field(default_factory=list)

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.publication_types:
            params["publicationTypes"] = join_values(self.publication_types)
        if self.open_access_pdf:
            # Flag parameter; the API ignores its value
            params["openAccessPdf"] = ""
        if self.min_citation_count is not None:
            if self.min_citation_count < 0:
                raise InvalidParameterError("min_citation_count must be non-negative")
            params["minCitationCount"] = str(self.min_citation_count)
        if self.publication_date is not None:
            params["publicationDateOrYear"] = str(self.publication_date)
        if self.year is not None:
            params["year"] = str(self.year)
        if self.fields_of_study:
            params["fieldsOfStudy"] = join_values(self.fields_of_study)
        if self.venues:
            params["venue"] = join_values(self.venues)
        return params


class QueryNode:
    """Node of a bulk search query. Combine with ``&``, ``|`` and ``~``."""

    def __and__(self, other: "QueryNode") -> "And":
        if isinstance(self, And):
            return And([*self.nodes, other])
        return And([self, other])

    def __or__(self, other: "QueryNode") -> "Or":
        if isinstance(self, Or):
            return Or([*self.nodes, other])
        return Or([self, other])

    def __invert__(self) -> "Not":
        return Not(self)


@dataclass(frozen=True)
class Term(QueryNode):
    word: str

    def __str__(self) -> str:
        return self.word


@dataclass(frozen=True)
class Phrase(QueryNode):
    text: str

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class Prefix(QueryNode):
    stem: str

    def __str__(self) -> str:
        return f"{self.stem}*"


@dataclass(frozen=True)
class Fuzzy(QueryNode):
    """Term matching within an edit distance (API default 2 when omitted)."""

    word: str
    distance: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.word}~" if self.distance is None else f"{self.word}~{self.distance}"


@dataclass(frozen=True)
class Proximity(QueryNode):
    """Phrase whose words may be up to ``distance`` words apart."""

    text: str
    distance: int

    def __str__(self) -> str:
        return f'"{self.text}"~{self.distance}'


@dataclass(frozen=True)
class And(QueryNode):
    nodes: list[QueryNode]

    def __str__(self) -> str:
        return " + ".join(f"({node})" if isinstance(node, Or) else str(node) for node in self.nodes)


@dataclass(frozen=True)
class Or(QueryNode):
    nodes: list[QueryNode]

    def __str__(self) -> str:
        return " | ".join(str(node) for node in self.nodes)


@dataclass(frozen=True)
class Not(QueryNode):
    node: QueryNode

    def __str__(self) -> str:
        if isinstance(self.node, (And, Or)):
            return f"-({self.node})"
        return f"-{self.node}"


class SortField(str, Enum):
    PAPER_ID = "paperId"
    PUBLICATION_DATE = "publicationDate"
    CITATION_COUNT = "citationCount"


@dataclass(frozen=True)
class Sort:
    """Bulk search ordering, e.g. ``Sort(SortField.CITATION_COUNT, descending=True)``."""

    field: SortField
    descending: bool = False

    def __str__(self) -> str:
        return f"{self.field.value}:{'desc' if self.descending else 'asc'}"
