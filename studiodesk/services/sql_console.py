"""Raw SQL passthrough for the admin SQL console.

The query text goes to the database verbatim. Nothing is parsed or rewritten
here; whatever the database refuses comes back as ``QueryResult.error``.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import date, datetime, time as dt_time
from decimal import Decimal
from io import BytesIO
from typing import Any, Optional

from flask import current_app
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from studiodesk.extensions import db


EMPTY_QUERY_MESSAGE = 'Query tidak boleh kosong.'


@dataclass
class QueryResult:
    rows: Optional[list[dict[str, Any]]] = None
    columns: list[str] = field(default_factory=list)
    row_count: int = 0
    error: Optional[str] = None
    execution_time_ms: int = 0
    truncated: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            'ok': self.ok,
            'data': self.rows,
            'columns': self.columns,
            'row_count': self.row_count,
            'error': self.error,
            'execution_time_ms': self.execution_time_ms,
            'truncated': self.truncated,
        }


def _json_safe(value: Any) -> Any:
    if isinstance(value, (datetime, date, dt_time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return value


def execute_query(query_text: str, max_rows: Optional[int] = None, commit: bool = True) -> QueryResult:
    """Run ``query_text`` as-is and collect rows or the affected row count.

    With ``commit=False`` the transaction is rolled back once the result is
    collected, so writes are reported but never applied.
    """

    if not (query_text or '').strip():
        return QueryResult(error=EMPTY_QUERY_MESSAGE)

    limit = max_rows or int(current_app.config.get('SQL_CONSOLE_MAX_ROWS', 1000))
    started = time.perf_counter()

    try:
        result = db.session.execute(text(query_text))
        if result.returns_rows:
            columns = list(result.keys())
            fetched = result.mappings().fetchmany(limit + 1)
            truncated = len(fetched) > limit
            rows = [{key: _json_safe(value) for key, value in row.items()} for row in fetched[:limit]]
            outcome = QueryResult(rows=rows, columns=columns, row_count=len(rows), truncated=truncated)
        else:
            affected = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else 0
            outcome = QueryResult(rows=[], row_count=affected)
        if commit:
            db.session.commit()
        else:
            db.session.rollback()
    except SQLAlchemyError as exc:
        db.session.rollback()
        message = str(getattr(exc, 'orig', None) or exc)
        current_app.logger.info('SQL console query failed: %s', message)
        outcome = QueryResult(error=message)

    outcome.execution_time_ms = int((time.perf_counter() - started) * 1000)
    return outcome


def list_tables() -> list[str]:
    return sorted(inspect(db.engine).get_table_names())


def describe_table(table_name: str) -> list[dict[str, Any]]:
    """Column name, data type and nullability for one table, in ordinal order."""

    inspector = inspect(db.engine)
    if table_name not in set(inspector.get_table_names()):
        return []
    return [
        {
            'table_name': table_name,
            'column_name': column['name'],
            'data_type': str(column['type']),
            'is_nullable': 'YES' if column.get('nullable', True) else 'NO',
        }
        for column in inspector.get_columns(table_name)
    ]


def result_to_json_bytes(result: QueryResult) -> BytesIO:
    bio = BytesIO(json.dumps(result.rows or [], indent=2, ensure_ascii=False).encode('utf-8'))
    bio.seek(0)
    return bio


def result_to_excel_bytes(result: QueryResult, *, query_text: str = '') -> BytesIO:
    """Result grid as an in-memory workbook, query text on a second sheet."""

    wb = Workbook()
    ws = wb.active
    ws.title = 'Hasil'

    columns = result.columns or (list(result.rows[0].keys()) if result.rows else [])
    for col, name in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col, value=name)
        cell.font = Font(bold=True, color='FFFFFF')
        cell.fill = PatternFill('solid', fgColor='1F2937')
        cell.alignment = Alignment(horizontal='center', vertical='center')
        ws.column_dimensions[get_column_letter(col)].width = max(12, min(len(str(name)) + 4, 48))

    for row_idx, row in enumerate(result.rows or [], start=2):
        for col, name in enumerate(columns, start=1):
            value = row.get(name)
            if isinstance(value, (dict, list)):
                value = json.dumps(value, ensure_ascii=False)
            ws.cell(row=row_idx, column=col, value=value)

    ws.freeze_panes = 'A2'

    meta_ws = wb.create_sheet('Query')
    meta_ws['A1'] = 'Dijalankan'
    meta_ws['B1'] = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%SZ')
    meta_ws['A2'] = 'Query'
    meta_ws['B2'] = query_text
    meta_ws['A3'] = 'Jumlah baris'
    meta_ws['B3'] = result.row_count
    meta_ws.column_dimensions['A'].width = 16
    meta_ws.column_dimensions['B'].width = 80

    bio = BytesIO()
    wb.save(bio)
    bio.seek(0)
    return bio
