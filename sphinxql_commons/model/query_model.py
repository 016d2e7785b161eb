from pydantic import BaseModel, Field
from typing import Any, List, Optional, Tuple

from sphinxql_commons.constants.filter_mode import Combinator, FilterMode
from sphinxql_commons.constants.query_constants import QueryConstants


class FilterRange(BaseModel):
    """Inclusive range used for BETWEEN filters"""
    low: Any
    high: Any


class FilterCondition(BaseModel):
    """A single attribute filter on the WHERE chain"""
    field: str
    value: Any
    mode: FilterMode = FilterMode.INCLUDE
    combinator: Combinator = Combinator.ANY


class QueryRequest(BaseModel):
    """Accumulated state of a SELECT statement being built"""

    # sources and projection
    indices: List[str] = Field(default_factory=list)
    select_expressions: List[str] = Field(default_factory=list)

    # full-text and attribute filtering
    match_term: Optional[str] = None
    filters: List[FilterCondition] = Field(default_factory=list)

    # grouping
    group_field: Optional[str] = None
    group_best_n: Optional[int] = None
    having_expression: Optional[str] = None

    # ordering
    order_expressions: List[str] = Field(default_factory=list)
    group_order_expressions: List[str] = Field(default_factory=list)

    # pagination
    limit: Optional[int] = None
    offset: Optional[int] = None
    default_limit: int = QueryConstants.DEFAULT_LIMIT

    # engine options, repeated keys are kept
    options: List[Tuple[str, Any]] = Field(default_factory=list)

    def has_pagination(self) -> bool:
        return self.limit is not None or self.offset is not None
