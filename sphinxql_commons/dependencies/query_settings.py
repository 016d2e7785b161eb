import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from sphinxql_commons.constants.query_constants import QueryConstants

load_dotenv()
logger = logging.getLogger(__name__)


class QuerySettings(BaseModel):
    default_limit: int = Field(QueryConstants.DEFAULT_LIMIT, gt=0)
    log_queries: bool = False


# Singleton instance
__query_settings = None


def load_query_settings() -> QuerySettings:
    """Build settings from the environment (.env files included)"""
    raw_limit = os.getenv(QueryConstants.ENV_DEFAULT_LIMIT, str(QueryConstants.DEFAULT_LIMIT))
    try:
        default_limit = int(raw_limit)
    except ValueError:
        raise ValueError(f"{QueryConstants.ENV_DEFAULT_LIMIT} must be an integer, got {raw_limit!r}")

    log_queries = os.getenv(QueryConstants.ENV_LOG_QUERIES, "false").strip().lower() in ("true", "1", "yes")
    return QuerySettings(default_limit=default_limit, log_queries=log_queries)


def get_query_settings() -> QuerySettings:
    """Dependency provider for QuerySettings (singleton)"""
    global __query_settings

    if __query_settings is None:
        __query_settings = load_query_settings()
        logger.info(f"Loaded query settings: {__query_settings}")

    return __query_settings


def reset_query_settings() -> None:
    global __query_settings
    __query_settings = None
