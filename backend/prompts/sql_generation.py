"""
LangChain prompt templates for SQL generation.
"""
from langchain_core.prompts import PromptTemplate

DIALECT_HINTS = {
    "mssql": "Microsoft SQL Server. Generate T-SQL queries. Use SQL Server syntax (TOP instead of LIMIT, etc.)",
    "postgresql": "PostgreSQL. Generate PostgreSQL queries. Use LIMIT to restrict row counts",
    "sqlite": "SQLite. Generate SQLite queries. Use LIMIT to restrict row counts",
}

MODE_RULES = {
    "read_only": "Only SELECT queries",
    "read_write": "Generate SELECT, UPDATE, INSERT, or DELETE queries as appropriate for the user's request",
}

# ── SQL generation ────────────────────────────────────────────────────────────

SQL_SYSTEM_TEMPLATE = """\
You are a database assistant for {dialect}. \
Whenever you encounter a foreign key, resolve to the referenced table. Here is the schema:
{schema_json}

Rules:
1. {mode_rule}
2. Only these tables: {allowed_tables}
3. Answer in plain prose and include at most one SQL query
4. Wrap SQL in ```sql``` blocks
"""

sql_system_prompt = PromptTemplate(
    input_variables=["dialect", "schema_json", "mode_rule", "allowed_tables"],
    template=SQL_SYSTEM_TEMPLATE,
)
