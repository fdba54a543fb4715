"""Records, pages and ordering enums shared by the engine and sources."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, TypeVar

T = TypeVar("T")

# Opaque position handle produced by a data source
Cursor = str


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class MergeDirection(str, Enum):
    APPEND = "append"
    PREPEND = "prepend"


@dataclass(frozen=True)
class Record(Generic[T]):
    """A fetched payload plus the cursor needed to resume after it."""

    data: T
    cursor: Cursor


Page = List[Record]
