"""
Conversation assembler — builds the role-tagged message list for the model
and pulls the SQL fence back out of its reply.
"""
import json
import re
from typing import Optional

from models.chat import HistoryMessage
from models.schema import SchemaDescriptor
from core.schema_catalog import schema_as_json
from prompts.sql_generation import sql_system_prompt, DIALECT_HINTS, MODE_RULES

_SQL_FENCE = re.compile(r"```sql[ \t]*\r?\n([\s\S]*?)```", re.IGNORECASE)


def build_system_prompt(
    schema: SchemaDescriptor,
    allowed_tables: list[str],
    db_type: str,
    mode: str,
) -> str:
    return sql_system_prompt.format(
        dialect=DIALECT_HINTS.get(db_type, DIALECT_HINTS["mssql"]),
        schema_json=json.dumps(schema_as_json(schema), indent=2),
        mode_rule=MODE_RULES[mode],
        allowed_tables=", ".join(allowed_tables),
    )


def build_messages(
    history: list[HistoryMessage],
    new_message: str,
    system_prompt: str,
) -> list[dict]:
    """System instruction, then prior turns in order, then the new user message."""
    messages = [{"role": "system", "content": system_prompt}]
    messages.extend({"role": turn.role, "content": turn.content} for turn in history)
    messages.append({"role": "user", "content": new_message})
    return messages


def extract_sql_query(reply: str) -> Optional[str]:
    """Return the trimmed body of the first ```sql fence, or None."""
    match = _SQL_FENCE.search(reply or "")
    if not match:
        return None
    return match.group(1).strip()
