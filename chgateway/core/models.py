from dataclasses import dataclass
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class Column:
    name: str
    type: str


# =========================
# Records table
# =========================
RECORD_COLUMNS: Tuple[Column, ...] = (
    Column("id", "Int64"),
    Column("name", "String"),
    Column("id_card", "String"),
    Column("phone", "String"),
    Column("affiliation", "String"),
    Column("additional_info", "String"),
)

ENGINE = "MergeTree()"
ORDER_BY = "id"

# Demo rows inserted right after the table is created
SEED_ROWS: Tuple[Tuple[object, ...], ...] = (
    (2, "hacker", "3333", "15534212521", "15534212521", "15534212521"),
    (1, "gacj", "33333333", "15534212521", "1223321", "hacker"),
)


def _literal(value: object) -> str:
    if isinstance(value, int):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def create_table_statement(table: str, columns: Sequence[Column] = RECORD_COLUMNS) -> str:
    column_lines = ",\n".join(f"    {column.name} {column.type}" for column in columns)
    return (
        f"CREATE TABLE {table} (\n{column_lines}\n) "
        f"ENGINE = {ENGINE} ORDER BY {ORDER_BY}"
    )


def insert_statement(
    table: str,
    rows: Sequence[Sequence[object]] = SEED_ROWS,
    columns: Sequence[Column] = RECORD_COLUMNS,
) -> str:
    names = ",".join(column.name for column in columns)
    values: List[str] = [
        "(" + ",".join(_literal(value) for value in row) + ")" for row in rows
    ]
    return f"INSERT INTO {table} ({names}) VALUES\n" + ",\n".join(values)


def describe_statement(table: str) -> str:
    return f"desc {table}"
