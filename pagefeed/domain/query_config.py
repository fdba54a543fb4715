"""Query configuration for one pagination session."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pagefeed.core.errors import InvalidConfiguration
from pagefeed.domain.records import MergeDirection, SortDirection

DEFAULT_LIMIT = 2


class QueryConfig(BaseModel):
    """What to fetch, in which order, and where new pages go"""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    path: str = Field(min_length=1, description="Collection to read from")
    field: str = Field(min_length=1, description="Attribute used for ordering")
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, description="Records per fetch")
    reverse: bool = Field(
        default=False, description="Ascending order instead of descending"
    )
    prepend: bool = Field(
        default=False, description="Merge new pages at the head"
    )

    @property
    def direction(self) -> SortDirection:
        return SortDirection.ASC if self.reverse else SortDirection.DESC

    @property
    def merge(self) -> MergeDirection:
        return MergeDirection.PREPEND if self.prepend else MergeDirection.APPEND


def build(
    path: str, field: str, overrides: Optional[Dict[str, Any]] = None
) -> QueryConfig:
    """Merge ``overrides`` onto the defaults and validate the result.

    Args:
        path: Collection identifier
        field: Attribute to order by
        overrides: Any of ``limit``, ``reverse``, ``prepend``

    Returns:
        QueryConfig: Frozen configuration

    Raises:
        InvalidConfiguration: If a value is missing, mistyped or unknown
    """
    values: Dict[str, Any] = {"path": path, "field": field}
    values.update(overrides or {})
    try:
        return QueryConfig(**values)
    except ValidationError as e:
        raise InvalidConfiguration(f"Invalid query configuration: {e}") from e
