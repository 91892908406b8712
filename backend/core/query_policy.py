"""
Query policy — lexical classification and gating of model-generated SQL.

This is a keyword filter, not a parser: it knows nothing about comments,
string literals or statement boundaries. A SELECT that merely mentions a
denied word (e.g. WHERE Name = 'UPDATE') is rejected. Gating on a parsed
statement type and referenced-table set would remove that false positive.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union

from models.query import QueryResult

logger = logging.getLogger(__name__)

DENIED_KEYWORDS = (
    "DROP", "DELETE", "INSERT", "UPDATE", "ALTER", "CREATE",
    "TRUNCATE", "EXEC", "EXECUTE", "GRANT", "REVOKE",
)
WRITE_VERBS = ("UPDATE", "INSERT", "DELETE")

SELECT_ONLY_MESSAGE = "Only SELECT queries are allowed"
WRITE_NOT_EXECUTED_MESSAGE = (
    "Query not executed: Modifying queries (UPDATE, INSERT, DELETE) "
    "are not automatically executed for safety reasons."
)
WRITE_REFUSAL_TEMPLATE = (
    "I'm sorry, Dave, I can't do that, but here is the query:\n\n"
    "```sql\n{query}\n```\n\n"
    "This query would modify the database, so it won't be executed automatically. "
    "If you need to run this query, please execute it manually through a secure "
    "database management interface."
)

QueryMode = Literal["read_only", "read_write"]


class Classification(str, Enum):
    READ = "read"
    WRITE = "write"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ClassifiedQuery:
    classification: Classification
    reason: Optional[str] = None   # set only for REJECTED


@dataclass(frozen=True)
class Execute:
    sql: str


@dataclass(frozen=True)
class Refuse:
    result: QueryResult
    message: Optional[str] = None   # replaces the assistant reply when set


GateDecision = Union[Execute, Refuse]


def _denied_keyword(upper: str, exempt: Optional[str] = None) -> Optional[str]:
    """First deny-listed keyword occurring anywhere in the text (substring match)."""
    for keyword in DENIED_KEYWORDS:
        if keyword == exempt:
            continue
        if keyword in upper:
            return keyword
    return None


def classify(candidate: str, mode: QueryMode = "read_only") -> ClassifiedQuery:
    """Label a candidate query as read, write or rejected. Pure function of its inputs."""
    upper = candidate.upper().strip()

    if upper.startswith("SELECT"):
        verb = None
    elif mode == "read_write":
        verb = next((v for v in WRITE_VERBS if upper.startswith(v)), None)
        if verb is None:
            return ClassifiedQuery(Classification.REJECTED, SELECT_ONLY_MESSAGE)
    else:
        return ClassifiedQuery(Classification.REJECTED, SELECT_ONLY_MESSAGE)

    keyword = _denied_keyword(upper, exempt=verb)
    if keyword:
        return ClassifiedQuery(Classification.REJECTED, f'Keyword "{keyword}" is not allowed')

    if verb:
        return ClassifiedQuery(Classification.WRITE)
    return ClassifiedQuery(Classification.READ)


def gate(classified: ClassifiedQuery, candidate: str) -> GateDecision:
    """Decide whether a classified query may run. Writes are never executed."""
    if classified.classification is Classification.READ:
        return Execute(candidate)

    if classified.classification is Classification.WRITE:
        logger.info("Refusing modifying query")
        return Refuse(
            result=QueryResult.failed(WRITE_NOT_EXECUTED_MESSAGE),
            message=WRITE_REFUSAL_TEMPLATE.format(query=candidate),
        )

    logger.info("Rejected query: %s", classified.reason)
    return Refuse(result=QueryResult.failed(classified.reason or SELECT_ONLY_MESSAGE))
