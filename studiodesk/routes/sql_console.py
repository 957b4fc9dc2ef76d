"""
SQL Console Blueprint - raw queries, schema explorer and result export.
"""

from datetime import datetime

from flask import Blueprint, abort, current_app, flash, request, send_file
from flask_login import current_user

from studiodesk.domain.enums import View
from studiodesk.routes.helpers import json_page, view_required
from studiodesk.services.sql_console import (
    describe_table,
    execute_query,
    list_tables,
    result_to_excel_bytes,
    result_to_json_bytes,
)

sql_console_bp = Blueprint('sql_console', __name__)


def _query_text():
    body = request.get_json(silent=True) if request.is_json else None
    if isinstance(body, dict):
        return str(body.get('query') or '')
    return request.form.get('query', '')


@sql_console_bp.route('/tables', methods=['GET'])
@view_required(View.SQL_EDITOR)
def tables():
    return json_page({'tables': list_tables()})


@sql_console_bp.route('/tables/<table_name>', methods=['GET'])
@view_required(View.SQL_EDITOR)
def table_columns(table_name):
    columns = describe_table(table_name)
    if not columns:
        abort(404)
    return json_page({'table': table_name, 'columns': columns})


@sql_console_bp.route('/query', methods=['POST'])
@view_required(View.SQL_EDITOR)
def run_query():
    query_text = _query_text()
    current_app.logger.info('SQL console query by %s', current_user.email)
    result = execute_query(query_text)
    if not result.ok:
        flash(result.error, 'danger')
        return json_page({**result.to_dict(), 'ok': False}, 400)
    flash(f'Query berhasil dijalankan ({result.row_count} baris, {result.execution_time_ms} ms)', 'success')
    return json_page(result.to_dict())


@sql_console_bp.route('/export/<fmt>', methods=['POST'])
@view_required(View.SQL_EDITOR)
def export(fmt):
    if fmt not in ('json', 'xlsx'):
        abort(404)

    query_text = _query_text()
    # Export only serializes; the statement was already applied by /query.
    result = execute_query(query_text, commit=False)
    if not result.ok:
        flash(result.error, 'danger')
        return json_page({**result.to_dict(), 'ok': False}, 400)

    stamp = datetime.utcnow().strftime('%Y%m%d-%H%M%S')
    if fmt == 'json':
        return send_file(
            result_to_json_bytes(result),
            mimetype='application/json',
            as_attachment=True,
            download_name=f'query-result-{stamp}.json',
        )
    return send_file(
        result_to_excel_bytes(result, query_text=query_text),
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=f'query-result-{stamp}.xlsx',
    )
