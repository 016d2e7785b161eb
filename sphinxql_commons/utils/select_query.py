import logging
from typing import Any, Dict, Iterable, List, Optional

from sphinxql_commons.constants.filter_mode import Combinator, FilterMode
from sphinxql_commons.constants.query_constants import QueryConstants
from sphinxql_commons.dependencies.query_settings import QuerySettings, get_query_settings
from sphinxql_commons.model.query_model import FilterCondition, QueryRequest
from sphinxql_commons.utils.sphinxql_renderer import SphinxQLRenderer

"""
================================================================================
SphinxQL SELECT builder – Usage Guide
================================================================================
    from sphinxql_commons.utils.select_query import SelectQuery

    query = (SelectQuery()
             .from_indices('article_core', 'article_delta')
             .matching('climate')
             .where(author_id=10, published_at=date(2024, 1, 1))
             .where_not(tags=[3, 4])
             .order_by('@weight DESC')
             .limit(10)
             .with_options(field_weights={'title': 10, 'body': 1}))

    query.to_sql()
    # SELECT * FROM article_core, article_delta WHERE MATCH('climate')
    #   AND `author_id` = 10 AND `published_at` = 1704067200
    #   AND `tags` NOT IN (3, 4) ORDER BY @weight DESC LIMIT 10
    #   OPTION field_weights=(title=10, body=1)

Filters accept a dict (required for JSON attribute paths such as
'meta.author') and/or keyword arguments. Empty lists are ignored.
================================================================================
"""

logger = logging.getLogger(__name__)


class SelectQuery:
    """
    Fluent builder for SphinxQL SELECT statements.
    Every method mutates the owned QueryRequest and returns the builder.
    """

    def __init__(self, settings: Optional[QuerySettings] = None):
        self.settings = settings or get_query_settings()
        self.request = QueryRequest(default_limit=self.settings.default_limit)

    # -------------------------
    # sources and projection
    # -------------------------
    def from_indices(self, *indices) -> 'SelectQuery':
        self.request.indices.extend(self._flatten(indices))
        return self

    def values(self, *expressions) -> 'SelectQuery':
        self.request.select_expressions.extend(self._flatten(expressions))
        return self

    def prepend_values(self, *expressions) -> 'SelectQuery':
        self.request.select_expressions[:0] = self._flatten(expressions)
        return self

    # -------------------------
    # filtering
    # -------------------------
    def matching(self, term: str) -> 'SelectQuery':
        self.request.match_term = term
        return self

    def where(self, filters: Optional[Dict[str, Any]] = None, **kwargs) -> 'SelectQuery':
        return self._add_filters(filters, kwargs, FilterMode.INCLUDE, Combinator.ANY)

    def where_not(self, filters: Optional[Dict[str, Any]] = None, **kwargs) -> 'SelectQuery':
        return self._add_filters(filters, kwargs, FilterMode.EXCLUDE, Combinator.ANY)

    def where_all(self, filters: Optional[Dict[str, Any]] = None, **kwargs) -> 'SelectQuery':
        return self._add_filters(filters, kwargs, FilterMode.INCLUDE, Combinator.ALL)

    def where_not_all(self, filters: Optional[Dict[str, Any]] = None, **kwargs) -> 'SelectQuery':
        return self._add_filters(filters, kwargs, FilterMode.EXCLUDE, Combinator.ALL)

    # -------------------------
    # grouping and ordering
    # -------------------------
    def group_by(self, field: str) -> 'SelectQuery':
        self.request.group_field = field
        return self

    def group_best(self, count: int) -> 'SelectQuery':
        self.request.group_best_n = count
        return self

    def having(self, expression: str) -> 'SelectQuery':
        self.request.having_expression = expression
        return self

    def order_by(self, *orders) -> 'SelectQuery':
        self.request.order_expressions.extend(self._flatten(orders))
        return self

    def order_within_group_by(self, *orders) -> 'SelectQuery':
        self.request.group_order_expressions.extend(self._flatten(orders))
        return self

    # -------------------------
    # pagination and options
    # -------------------------
    def limit(self, limit: int) -> 'SelectQuery':
        self.request.limit = limit
        return self

    def offset(self, offset: int) -> 'SelectQuery':
        self.request.offset = offset
        return self

    def with_options(self, options: Optional[Dict[str, Any]] = None, **kwargs) -> 'SelectQuery':
        for source in (options or {}, kwargs):
            self.request.options.extend(source.items())
        return self

    # -------------------------
    # rendering
    # -------------------------
    def to_sql(self) -> str:
        clauses = [
            self._select_clause(),
            self._where_clause(),
            self._group_clause(),
            self._having_clause(),
            self._order_clause(QueryConstants.ORDER_BY, self.request.order_expressions),
            self._order_clause(QueryConstants.WITHIN_GROUP_ORDER_BY, self.request.group_order_expressions),
            self._limit_clause(),
            self._option_clause(),
        ]
        sql = QueryConstants.CLAUSE_SEPARATOR.join(clause for clause in clauses if clause)

        log_level = logging.INFO if self.settings.log_queries else logging.DEBUG
        logger.log(log_level, f"Generated SphinxQL: {sql}")
        return sql

    def __str__(self) -> str:
        return self.to_sql()

    def _select_clause(self) -> str:
        expressions = self.request.select_expressions or [QueryConstants.WILDCARD]
        return (f"{QueryConstants.SELECT} {QueryConstants.LIST_SEPARATOR.join(expressions)} "
                f"{QueryConstants.FROM} {QueryConstants.LIST_SEPARATOR.join(self.request.indices)}")

    def _where_clause(self) -> Optional[str]:
        fragments: List[str] = []
        if self.request.match_term is not None:
            fragments.append(f"{QueryConstants.MATCH}({SphinxQLRenderer.quote_string(self.request.match_term)})")

        for condition in self.request.filters:
            fragment = self._filter_fragment(condition)
            if fragment:
                fragments.append(fragment)

        if not fragments:
            return None
        return f"{QueryConstants.WHERE} {QueryConstants.AND.join(fragments)}"

    def _filter_fragment(self, condition: FilterCondition) -> Optional[str]:
        column = SphinxQLRenderer.escape_column(condition.field)

        if condition.combinator == Combinator.ANY:
            comparison = SphinxQLRenderer.format_comparison(condition.field, condition.value, condition.mode)
            return f"{column} {comparison}" if comparison else None

        values = condition.value if isinstance(condition.value, (list, tuple)) else [condition.value]
        if not values:
            return None

        if condition.mode == FilterMode.EXCLUDE:
            parts = [
                f"{column} {QueryConstants.NOT_EQUALS} {SphinxQLRenderer.format_scalar(condition.field, value)}"
                for value in values
            ]
            return '(' + QueryConstants.OR.join(parts) + ')'

        parts = []
        for value in values:
            if isinstance(value, (list, tuple)):
                if value:
                    parts.append(f"{column} {QueryConstants.IN} {SphinxQLRenderer.format_list(condition.field, value)}")
            else:
                parts.append(f"{column} {QueryConstants.EQUALS} {SphinxQLRenderer.format_scalar(condition.field, value)}")
        return QueryConstants.AND.join(parts)

    def _group_clause(self) -> Optional[str]:
        if self.request.group_field is None:
            return None

        column = SphinxQLRenderer.escape_column(self.request.group_field)
        if self.request.group_best_n is None:
            return f"{QueryConstants.GROUP_BY} {column}"
        return f"GROUP {self.request.group_best_n} BY {column}"

    def _having_clause(self) -> Optional[str]:
        if self.request.having_expression is None:
            return None
        return f"{QueryConstants.HAVING} {self.request.having_expression}"

    @staticmethod
    def _order_clause(keyword: str, orders: List[str]) -> Optional[str]:
        if not orders:
            return None
        return f"{keyword} " + QueryConstants.LIST_SEPARATOR.join(SphinxQLRenderer.escape_column(o) for o in orders)

    def _limit_clause(self) -> Optional[str]:
        if not self.request.has_pagination():
            return None

        limit = self.request.limit if self.request.limit is not None else self.request.default_limit
        if self.request.offset is None:
            return f"{QueryConstants.LIMIT} {limit}"
        return f"{QueryConstants.LIMIT} {self.request.offset}, {limit}"

    def _option_clause(self) -> Optional[str]:
        if not self.request.options:
            return None
        pairs = [f"{key}={SphinxQLRenderer.format_option_value(value)}" for key, value in self.request.options]
        return f"{QueryConstants.OPTION} " + QueryConstants.LIST_SEPARATOR.join(pairs)

    # -------------------------
    # helpers
    # -------------------------
    def _add_filters(self, filters: Optional[Dict[str, Any]], kwargs: Dict[str, Any],
                     mode: FilterMode, combinator: Combinator) -> 'SelectQuery':
        for source in (filters or {}, kwargs):
            for field, value in source.items():
                self.request.filters.append(
                    FilterCondition(field=str(field), value=value, mode=mode, combinator=combinator)
                )
        return self

    @staticmethod
    def _flatten(items: Iterable[Any]) -> List[str]:
        flat: List[str] = []
        for item in items:
            if isinstance(item, (list, tuple)):
                flat.extend(str(i) for i in item)
            else:
                flat.append(str(item))
        return flat
