"""Intents emitted by the presentation layer and notices sent back to it."""

from dataclasses import dataclass
from enum import Enum

from ledgerview.domain.entities import FilterCriteria, RecordDraft, SortOrder


@dataclass(frozen=True)
class Reload:
    pass


@dataclass(frozen=True)
class ApplyFilter:
    criteria: FilterCriteria


@dataclass(frozen=True)
class ResetFilters:
    pass


@dataclass(frozen=True)
class Search:
    term: str


@dataclass(frozen=True)
class Sort:
    order: SortOrder


@dataclass(frozen=True)
class GoToPage:
    number: int


@dataclass(frozen=True)
class ChangePage:
    delta: int


@dataclass(frozen=True)
class SetPageSize:
    size: int


@dataclass(frozen=True)
class Edit:
    """Request a fresh copy of a record for editing."""

    record_id: int


@dataclass(frozen=True)
class Create:
    draft: RecordDraft


@dataclass(frozen=True)
class Update:
    record_id: int
    draft: RecordDraft


@dataclass(frozen=True)
class Delete:
    record_id: int


Intent = (
    Reload
    | ApplyFilter
    | ResetFilters
    | Search
    | Sort
    | GoToPage
    | ChangePage
    | SetPageSize
    | Edit
    | Create
    | Update
    | Delete
)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """Message for the user about the outcome of an intent."""

    level: NoticeLevel
    message: str
    details: str = ""

    @property
    def is_error(self) -> bool:
        return self.level == NoticeLevel.ERROR
