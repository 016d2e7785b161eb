class QueryConstants:
    # defaults
    DEFAULT_LIMIT = 20
    DEFAULT_OFFSET = 0
    WILDCARD = '*'

    # keywords
    SELECT = 'SELECT'
    FROM = 'FROM'
    WHERE = 'WHERE'
    MATCH = 'MATCH'
    GROUP_BY = 'GROUP BY'
    HAVING = 'HAVING'
    ORDER_BY = 'ORDER BY'
    WITHIN_GROUP_ORDER_BY = 'WITHIN GROUP ORDER BY'
    LIMIT = 'LIMIT'
    OPTION = 'OPTION'

    # operators
    EQUALS = '='
    NOT_EQUALS = '<>'
    IN = 'IN'
    NOT_IN = 'NOT IN'
    BETWEEN = 'BETWEEN'
    NOT_BETWEEN = 'NOT BETWEEN'
    AND = ' AND '
    OR = ' OR '

    # separators
    LIST_SEPARATOR = ', '
    CLAUSE_SEPARATOR = ' '

    # identifiers
    BACKTICK = '`'
    VARIABLE_PREFIX = '@'

    # settings env keys
    ENV_DEFAULT_LIMIT = 'SPHINXQL_DEFAULT_LIMIT'
    ENV_LOG_QUERIES = 'SPHINXQL_LOG_QUERIES'
