import pytest

from app.machines.errors import DatabaseQueryError, GenerationFailure, UnsafeQueryError
from app.machines.ingest import replace_machines
from app.machines.prompts import SQL_INSTRUCTIONS
from app.machines.sqlgen import ensure_safe_sql, execute_select, generate_sql, strip_code_fences
from conftest import FakeBackend

CT2_SQL = "SELECT * FROM machines WHERE machine LIKE '%CT2%'"


@pytest.mark.parametrize("raw", [
    f"```sql\n{CT2_SQL}\n```",
    f"```SQL\n{CT2_SQL}\n```",
    f"```\n{CT2_SQL}\n```",
    f"  {CT2_SQL}  \n",
])
def test_strip_code_fences(raw):
    assert strip_code_fences(raw) == CT2_SQL


def test_generate_sql_prompt_and_cleanup():
    backend = FakeBackend(replies=[f"```sql\n{CT2_SQL}\n```"])
    assert generate_sql("Where is the CT2?", backend) == CT2_SQL

    (prompt,) = backend.prompts
    assert prompt.startswith(SQL_INSTRUCTIONS)
    assert prompt.endswith('Question: "Where is the CT2?"\nSQL:')


def test_generate_sql_wraps_backend_errors():
    backend = FakeBackend(replies=[ConnectionError("unreachable")])
    with pytest.raises(GenerationFailure) as exc:
        generate_sql("Where is the CT2?", backend)
    assert "unreachable" in exc.value.details


@pytest.mark.parametrize("sql", [
    CT2_SQL,
    "select count(*) from machines",
    "  \n SeLeCt machine FROM machines  ",
])
def test_gate_accepts_single_select(sql):
    assert ensure_safe_sql(sql) == sql.strip()


@pytest.mark.parametrize("sql", [
    "DROP TABLE machines",
    "delete from machines",
    "UPDATE machines SET status = 'x'",
    "WITH x AS (SELECT 1) SELECT * FROM x",
    "SELECT 1; DROP TABLE machines",
    "SELECT * FROM machines;",
    "",
    None,
])
def test_gate_rejects(sql):
    with pytest.raises(UnsafeQueryError):
        ensure_safe_sql(sql)


def test_execute_select_returns_dicts(engine):
    replace_machines(engine, [("C", "R", "CT2", None, "2025-03-02", None, None, None, None, None, None)])
    rows = execute_select(engine, CT2_SQL)
    assert rows == [{
        "id": 1, "customs": "C", "reference": "R", "machine": "CT2", "pn": None,
        "etb": "2025-03-02", "eta_port": None, "eta_destination": None,
        "ship": None, "division": None, "status": None, "bl": None,
    }]


def test_execute_select_colon_in_literal(engine):
    replace_machines(engine, [("C", "R", "CT2", None, None, None, None, None, None, "ETA 10:30", None)])
    rows = execute_select(engine, "SELECT machine FROM machines WHERE status = 'ETA 10:30'")
    assert rows == [{"machine": "CT2"}]


def test_execute_select_bad_column(engine):
    with pytest.raises(DatabaseQueryError) as exc:
        execute_select(engine, "SELECT nope FROM machines")
    assert "nope" in exc.value.details
