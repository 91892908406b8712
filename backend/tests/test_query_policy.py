import pytest
from core.query_policy import (
    Classification, Execute, Refuse, DENIED_KEYWORDS,
    SELECT_ONLY_MESSAGE, WRITE_NOT_EXECUTED_MESSAGE,
    classify, gate,
)


@pytest.mark.parametrize("sql", [
    "SELECT * FROM Items",
    "  select Name from Items where Quantity > 2  ",
    "SELECT TOP 10 * FROM Items",
])
def test_select_is_read(sql):
    assert classify(sql).classification is Classification.READ
    assert classify(sql, "read_write").classification is Classification.READ


@pytest.mark.parametrize("sql", [
    "DELETE FROM Items",
    "UPDATE Items SET Quantity = 0",
    "WITH x AS (SELECT 1) SELECT * FROM x",
    "EXPLAIN SELECT 1",
    "",
])
def test_read_only_rejects_anything_but_select(sql):
    result = classify(sql, "read_only")
    assert result.classification is Classification.REJECTED
    assert result.reason == SELECT_ONLY_MESSAGE


def test_denied_keyword_inside_literal_is_still_rejected():
    result = classify("SELECT * FROM Items WHERE Name = 'UPDATE'")
    assert result.classification is Classification.REJECTED
    assert result.reason == 'Keyword "UPDATE" is not allowed'


def test_substring_match_is_not_word_aware():
    # CreatedAt contains CREATE
    result = classify("SELECT CreatedAt FROM Items")
    assert result.classification is Classification.REJECTED
    assert "CREATE" in result.reason


@pytest.mark.parametrize("keyword", DENIED_KEYWORDS)
def test_every_denied_keyword_rejects_select(keyword):
    sql = f"SELECT * FROM Items; {keyword.lower()} something"
    assert classify(sql, "read_only").classification is Classification.REJECTED
    assert classify(sql, "read_write").classification is Classification.REJECTED


@pytest.mark.parametrize("sql", [
    "DELETE FROM Items WHERE ItemId = 1",
    "update Items set Quantity = 3 where ItemId = 2",
    "INSERT INTO Items (Name) VALUES ('Mop')",
])
def test_read_write_mode_classifies_writes(sql):
    assert classify(sql, "read_write").classification is Classification.WRITE


def test_write_with_another_denied_keyword_is_rejected():
    result = classify("DELETE FROM Items; DROP TABLE Items", "read_write")
    assert result.classification is Classification.REJECTED
    assert result.reason == 'Keyword "DROP" is not allowed'


def test_read_write_mode_rejects_other_statements():
    result = classify("DROP TABLE Items", "read_write")
    assert result.classification is Classification.REJECTED
    assert result.reason == SELECT_ONLY_MESSAGE


def test_classification_is_repeatable():
    sql = "SELECT Name FROM Items"
    assert classify(sql) == classify(sql)


def test_gate_executes_reads_verbatim():
    sql = "SELECT * FROM Items"
    decision = gate(classify(sql), sql)
    assert decision == Execute(sql)


def test_gate_refuses_writes_with_audit_message():
    sql = "DELETE FROM Items WHERE ItemId = 1"
    decision = gate(classify(sql, "read_write"), sql)
    assert isinstance(decision, Refuse)
    assert decision.result.success is False
    assert decision.result.error == WRITE_NOT_EXECUTED_MESSAGE
    assert "not automatically executed" in decision.result.error
    assert f"```sql\n{sql}\n```" in decision.message


def test_gate_refuses_rejected_with_rule_message():
    sql = "SELECT * FROM Items WHERE Name = 'DROP'"
    decision = gate(classify(sql), sql)
    assert isinstance(decision, Refuse)
    assert decision.message is None
    assert decision.result.error == 'Keyword "DROP" is not allowed'
