"""Conversion of Prisma seed scripts into SQL statements.

Recognized calls (``db`` is the default client name)::

    await db.user.deleteMany();
    await db.user.create({ data: { name: "Ada", posts: { create: [...] } } });
    await db.tag.createMany({ data: [{ label: "a" }, { label: "b" }] });
    await db.$executeRawUnsafe(`DELETE FROM User; DELETE FROM sqlite_sequence;`);
    await db.$executeRaw`UPDATE User SET active = 1`;

Calls are converted in source order. Call arguments must be plain literals
(see ``js_literal``); a call built from runtime values is reported with a
warning and skipped.

Nested relation writes inside ``create``:
    connect        ``user: { connect: { id: 1 } }`` sets ``userId = 1``
    create (one)   ``company: { create: {...} }`` inserts the company first,
                   then sets ``companyId`` to a reference to it
    create (many)  ``posts: { create: [...] }`` (or a plural field name)
                   inserts the posts after the owning row, each with
                   ``<owner>Id`` pointing back at it

A reference is the row's ``id`` when the seed sets one, otherwise a
subselect on the row's first plain column.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from rwsdk_tools.core.js_literal import JsLiteralError, SqlExpression, parse_js_literal
from rwsdk_tools.core.source_scan import find_matching_paren, mask_comments, skip_string
from rwsdk_tools.helpers.helpers_logging import print_warning
from rwsdk_tools.helpers.project_config import DEFAULT_SEED_CLIENTS

NO_STATEMENTS_COMMENT = (
    "-- This seed file contains complex operations that could not be "
    "automatically converted to SQL.\n\n"
    "-- Please review the seed file and manually create the appropriate "
    "SQL statements."
)

_RELATION_OPERATIONS = ("connect", "create", "createMany", "connectOrCreate")
# Field names ending like these are singular even though they end in "s".
_SINGULAR_ENDINGS = ("ss", "us", "is")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class SeedResult:
    """Outcome of converting one seed file."""

    statements: list[str]
    output_path: Path
    sql: str
    written: bool


def value_to_sql(value: object) -> str:
    """Render a literal value as SQL.

    Booleans render as ``1``/``0`` (SQLite/D1 has no boolean type) and
    objects or arrays as quoted JSON text.
    """
    if value is None:
        return "NULL"
    if isinstance(value, SqlExpression):
        return value.sql
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list)):
        text = json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            default=lambda v: v.sql if isinstance(v, SqlExpression) else str(v),
        )
        return _quote(text)
    return _quote(str(value))


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def render_insert(table: str, columns: dict[str, object]) -> str:
    """Render one ``INSERT`` statement."""
    if not columns:
        return f'INSERT INTO "{table}" DEFAULT VALUES;'
    names = ", ".join(f'"{name}"' for name in columns)
    values = ", ".join(value_to_sql(value) for value in columns.values())
    return f'INSERT INTO "{table}" ({names}) VALUES ({values});'


def split_sql_statements(sql: str) -> list[str]:
    """Split raw SQL on ``;`` into trimmed statements.

    Chunks made only of ``--`` comment lines are kept as-is, without a
    terminating semicolon.
    """
    statements: list[str] = []
    for chunk in sql.split(";"):
        lines = [line.strip() for line in chunk.splitlines() if line.strip()]
        if not lines:
            continue
        text = "\n".join(lines)
        if all(line.startswith("--") for line in lines):
            statements.append(text)
        else:
            statements.append(text + ";")
    return statements


def _is_relation_write(value: object) -> bool:
    return isinstance(value, dict) and bool(value) and any(
        key in _RELATION_OPERATIONS for key in value
    )


def _is_to_many(field_name: str) -> bool:
    return field_name.endswith("s") and not field_name.endswith(_SINGULAR_ENDINGS)


def _as_rows(payload: object) -> list[dict[str, object]]:
    items = payload if isinstance(payload, list) else [payload]
    return [item for item in items if isinstance(item, dict)]


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def _row_reference(table: str, columns: dict[str, object]) -> SqlExpression:
    """Build an expression that identifies an inserted row."""
    if columns.get("id") is not None:
        return SqlExpression(value_to_sql(columns["id"]))
    for name, value in columns.items():
        if isinstance(value, (str, int, float)):
            # Unquoted column name, unlike render_insert: existing seed SQL uses this form.
            return SqlExpression(
                f'(SELECT id FROM "{table}" WHERE {name} = {value_to_sql(value)})'
            )
    return SqlExpression(f'(SELECT MAX(id) FROM "{table}")')


class _StatementBuilder:
    """Accumulates the statements of one seed file in emission order."""

    def __init__(self) -> None:
        self.statements: list[str] = []

    def insert(self, table: str, data: dict[str, object]) -> SqlExpression:
        """Insert *data* (and its nested writes) into *table*.

        Returns:
            An expression referencing the inserted row.
        """
        columns: dict[str, object] = {}
        children: list[tuple[str, list[dict[str, object]]]] = []

        for field_name, value in data.items():
            if not _is_relation_write(value):
                columns[field_name] = value
                continue
            for operation, payload in cast(dict[str, object], value).items():
                self._relation_write(
                    table, field_name, operation, payload, columns, children,
                )

        self.statements.append(render_insert(table, columns))
        reference = _row_reference(table, columns)

        foreign_key = f"{table}Id"
        for child_table, rows in children:
            for row in rows:
                self.insert(child_table, {**row, foreign_key: reference})
        return reference

    def _relation_write(
        self,
        table: str,
        field_name: str,
        operation: str,
        payload: object,
        columns: dict[str, object],
        children: list[tuple[str, list[dict[str, object]]]],
    ) -> None:
        if operation == "connect":
            if not isinstance(payload, dict):
                print_warning(
                    f"Skipping multi-row connect on {table}.{field_name}: "
                    + "join tables are not generated"
                )
                return
            for key, key_value in payload.items():
                columns[f"{field_name}{_capitalize(key)}"] = key_value
            return

        if operation == "create":
            if isinstance(payload, list) or _is_to_many(field_name):
                children.append((field_name, _as_rows(payload)))
            elif isinstance(payload, dict):
                columns[f"{field_name}Id"] = self.insert(field_name, payload)
            return

        if operation == "createMany":
            rows = payload.get("data") if isinstance(payload, dict) else payload
            children.append((field_name, _as_rows(rows)))
            return

        print_warning(
            f"Skipping unsupported relation write '{operation}' on {table}.{field_name}"
        )


def _call_pattern(client_names: Sequence[str]) -> re.Pattern[str]:
    clients = "|".join(re.escape(name) for name in client_names)
    return re.compile(
        rf"(?<![\w$.])(?:{clients})\s*\.\s*"
        r"(?:\$(?P<raw>executeRawUnsafe|executeRaw)\s*(?P<opener>[(`])"
        r"|(?P<model>[A-Za-z_][\w$]*)\s*\.\s*(?P<op>createMany|create|deleteMany)\s*\()"
    )


def _line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def _raw_sql(text: str, match: re.Match[str]) -> tuple[str, int]:
    """Read the SQL string of a raw call; returns ``(sql, end_index)``."""
    opener_index = match.start("opener")
    if match.group("opener") == "`":
        end = skip_string(text, opener_index)
        literal = text[opener_index:end]
    else:
        end = find_matching_paren(text, opener_index + 1)
        literal = text[opener_index + 1:end]
        end += 1
    value = parse_js_literal(literal)
    if not isinstance(value, str):
        raise JsLiteralError("Raw SQL argument is not a string", opener_index)
    return value, end


def _model_call(
    builder: _StatementBuilder,
    model: str,
    operation: str,
    argument_text: str,
) -> None:
    argument = parse_js_literal(argument_text) if argument_text.strip() else {}
    if not isinstance(argument, dict):
        raise JsLiteralError(f"{operation} argument is not an object", 0)

    if operation == "deleteMany":
        if argument.get("where"):
            print_warning(f"Skipping {model}.deleteMany with a where filter")
            return
        builder.statements.append(f'DELETE FROM "{model}";')
        return

    data = argument.get("data")
    if operation == "createMany":
        for row in _as_rows(data):
            builder.insert(model, row)
        return

    if not isinstance(data, dict):
        raise JsLiteralError("create call has no 'data' object", 0)
    builder.insert(model, data)


def deduplicate_statements(statements: list[str]) -> list[str]:
    """Drop statements that repeat an earlier one up to whitespace."""
    seen: set[str] = set()
    unique: list[str] = []
    for statement in statements:
        normalized = _WHITESPACE_RE.sub(" ", statement).strip()
        if normalized not in seen:
            seen.add(normalized)
            unique.append(statement)
    return unique


def convert_seed(
    content: str,
    client_names: Sequence[str] = DEFAULT_SEED_CLIENTS,
) -> list[str]:
    """Convert the Prisma calls of a seed script into SQL statements.

    Returns:
        Statements in source order, deduplicated. Empty when nothing in the
        script could be converted.
    """
    text = mask_comments(content)
    pattern = _call_pattern(client_names)
    builder = _StatementBuilder()

    position = 0
    while True:
        match = pattern.search(text, position)
        if match is None:
            break
        line = _line_of(text, match.start())

        if match.group("raw"):
            try:
                sql, position = _raw_sql(text, match)
            except JsLiteralError as e:
                print_warning(f"Could not read raw SQL on line {line}: {e}")
                position = match.end()
                continue
            builder.statements.extend(split_sql_statements(sql))
            continue

        model, operation = match.group("model"), match.group("op")
        argument_end = find_matching_paren(text, match.end())
        argument_text = text[match.end():argument_end]
        position = argument_end + 1
        try:
            _model_call(builder, model, operation, argument_text)
        except JsLiteralError as e:
            print_warning(f"Could not convert {model}.{operation} on line {line}: {e}")

    return deduplicate_statements(builder.statements)


def render_sql(statements: list[str]) -> str:
    """Join statements with blank lines; explain when there are none."""
    if not statements:
        return NO_STATEMENTS_COMMENT + "\n"
    return "\n\n".join(statements) + "\n"


def default_output_path(input_path: Path) -> Path:
    """Return the ``.sql`` path next to *input_path*."""
    return input_path.with_suffix(".sql")


def convert_seed_file(
    input_path: Path,
    output_path: Path | None = None,
    client_names: Sequence[str] = DEFAULT_SEED_CLIENTS,
    dry_run: bool = False,
) -> SeedResult:
    """Convert *input_path* and write the SQL next to it (or to *output_path*).

    Raises:
        FileNotFoundError: If the seed file does not exist
    """
    if not input_path.is_file():
        raise FileNotFoundError(f"Seed file not found: {input_path}")

    statements = convert_seed(input_path.read_text(encoding="utf-8"), client_names)
    if not statements:
        print_warning(
            "No SQL statements were generated. The seed file may contain "
            + "operations that are not supported by this tool."
        )
    sql = render_sql(statements)
    target = output_path if output_path is not None else default_output_path(input_path)

    if not dry_run:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(sql, encoding="utf-8")

    return SeedResult(statements=statements, output_path=target, sql=sql, written=not dry_run)
