import logging
import re
from typing import Any, List, Optional

from sphinxql_commons.constants.filter_mode import FilterMode
from sphinxql_commons.constants.query_constants import QueryConstants
from sphinxql_commons.model.query_model import FilterRange
from sphinxql_commons.utils.datetime_utils import is_timestamp, to_epoch_seconds

"""
================================================================================
SphinxQL Renderer – literal and identifier formatting
================================================================================
Value literals:
    int             → 10
    bool            → 1 / 0
    str             → 'it\\'s'          (only single quotes are escaped)
    list            → IN (1, 2)  /  NOT IN (1, 2)
    FilterRange     → BETWEEN 1 AND 5
    range(1, 6)     → BETWEEN 1 AND 5  (step must be 1, stop is exclusive)
    date / datetime → seconds since the UTC epoch (dates at midnight UTC)

Identifiers:
    bar_id          → `bar_id`
    bar_id ASC      → `bar_id` ASC
    `bar_id` ASC    → unchanged
    @weight DESC    → unchanged
    weight() DESC   → unchanged
    a.b.c, a['b']   → unchanged (JSON attribute paths)
================================================================================
"""

logger = logging.getLogger(__name__)


class SphinxQLCompilationError(Exception):
    pass


class UnsupportedFilterValueError(SphinxQLCompilationError):

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(
            f"Unsupported filter value type for field '{field}': {type(value).__name__} ({value!r})"
        )


class SphinxQLRenderer:

    # identifiers that are already quoted, engine variables, function calls or JSON paths
    PASS_THROUGH_PATTERN = re.compile(r"\A(?:[`@]|\w+\(|\w+[.\[])")

    # operators of the extended query syntax
    MATCH_ESCAPE_PATTERN = re.compile(r"""([()|\-!@~"&/\\^$=<])""")

    # -------------------------
    # strings
    # -------------------------
    @staticmethod
    def quote_string(value: str) -> str:
        return "'" + value.replace("'", "\\'") + "'"

    @classmethod
    def escape_match_term(cls, term: str) -> str:
        """
        Backslash-escape extended query operators so user input is matched
        literally by MATCH().
        """
        return cls.MATCH_ESCAPE_PATTERN.sub(r"\\\1", term)

    # -------------------------
    # identifiers
    # -------------------------
    @classmethod
    def escape_column(cls, column: str) -> str:
        column = str(column)
        if not column.strip() or cls.PASS_THROUGH_PATTERN.match(column):
            return column

        name, *modifiers = column.split()
        return ' '.join([f"`{name}`"] + modifiers)

    # -------------------------
    # values
    # -------------------------
    @staticmethod
    def is_range(value: Any) -> bool:
        return isinstance(value, (FilterRange, range))

    @classmethod
    def format_scalar(cls, field: str, value: Any) -> str:
        """
        Format a single (non-collection) filter value.
        """
        # bool first, it is an int subclass
        if isinstance(value, bool):
            return '1' if value else '0'
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return cls.quote_string(value)
        if is_timestamp(value):
            return str(to_epoch_seconds(value))

        logger.error(f"Cannot render value {value!r} for field '{field}'")
        raise UnsupportedFilterValueError(field, value)

    @classmethod
    def format_list(cls, field: str, values: List[Any]) -> str:
        return '(' + QueryConstants.LIST_SEPARATOR.join(cls.format_scalar(field, v) for v in values) + ')'

    @classmethod
    def range_bounds(cls, field: str, value: Any) -> tuple:
        if isinstance(value, FilterRange):
            return value.low, value.high
        if value.step != 1:
            raise UnsupportedFilterValueError(field, value)
        return value.start, value.stop - 1

    @classmethod
    def format_comparison(cls, field: str, value: Any, mode: FilterMode) -> Optional[str]:
        """
        Render the operator and literal for a filter, e.g. "= 10" or "NOT IN (1, 2)".
        Returns None for empty lists so the caller can drop the filter.
        """
        exclude = mode == FilterMode.EXCLUDE

        if isinstance(value, (list, tuple)):
            if not value:
                return None
            operator = QueryConstants.NOT_IN if exclude else QueryConstants.IN
            return f"{operator} {cls.format_list(field, value)}"

        if cls.is_range(value):
            low, high = cls.range_bounds(field, value)
            operator = QueryConstants.NOT_BETWEEN if exclude else QueryConstants.BETWEEN
            return (f"{operator} {cls.format_scalar(field, low)}"
                    f"{QueryConstants.AND}{cls.format_scalar(field, high)}")

        operator = QueryConstants.NOT_EQUALS if exclude else QueryConstants.EQUALS
        return f"{operator} {cls.format_scalar(field, value)}"

    # -------------------------
    # options
    # -------------------------
    @classmethod
    def format_option_value(cls, value: Any) -> str:
        if isinstance(value, dict):
            pairs = [f"{k}={cls.format_option_value(v)}" for k, v in value.items()]
            return '(' + QueryConstants.LIST_SEPARATOR.join(pairs) + ')'
        if isinstance(value, bool):
            return '1' if value else '0'
        return str(value)
