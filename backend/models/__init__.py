from models.connection import ConnectionDescriptor  # noqa: F401
from models.schema import ColumnDescriptor, SchemaDescriptor  # noqa: F401
from models.query import QueryResult  # noqa: F401
from models.chat import ChatRequest, ChatResponse, HistoryMessage, TokenUsage  # noqa: F401
from models.telemetry import UserInfo, QueryTelemetry, ANONYMOUS_USER  # noqa: F401
