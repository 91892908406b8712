from core.db_connector import create_engine_from_descriptor, get_engine, DatabaseUnavailable  # noqa: F401
from core.schema_catalog import describe_schema  # noqa: F401
from core.query_policy import classify, gate, Classification, Execute, Refuse  # noqa: F401
from core.query_executor import execute_query  # noqa: F401
from core.conversation import build_messages, extract_sql_query  # noqa: F401
from core.chat_agent import handle_query  # noqa: F401
