"""SQL console: raw queries, schema explorer, export."""

from io import BytesIO
from uuid import uuid4

from openpyxl import load_workbook

from studiodesk.domain.enums import View
from studiodesk.services.sql_console import describe_table, execute_query
from studiodesk.services.table_service import get_service


def test_blank_query(admin_client):
    resp = admin_client.post('/app/sql/query', json={'query': '   '})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body['error'] == 'Query tidak boleh kosong.'
    assert body['toast']['category'] == 'danger'


def test_select_returns_rows(admin_client, seed):
    seed('clients', name='Rina')
    seed('clients', name='Dewi')

    resp = admin_client.post('/app/sql/query', json={'query': 'SELECT name FROM clients ORDER BY name'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['columns'] == ['name']
    assert body['data'] == [{'name': 'Dewi'}, {'name': 'Rina'}]
    assert body['row_count'] == 2
    assert body['truncated'] is False
    assert body['toast']['message'].startswith('Query berhasil dijalankan (2 baris')


def test_write_statement_reports_affected_rows(admin_client, seed):
    seed('clients', name='Rina', status='Aktif')
    body = admin_client.post('/app/sql/query', json={'query': "UPDATE clients SET status = 'Arsip'"}).get_json()
    assert body['ok'] is True
    assert body['data'] == []
    assert body['row_count'] == 1


def test_database_error_is_returned(admin_client):
    resp = admin_client.post('/app/sql/query', json={'query': 'SELECT * FROM tidak_ada'})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body['ok'] is False
    assert 'tidak_ada' in body['error']
    assert body['data'] is None


def test_form_post(admin_client):
    resp = admin_client.post('/app/sql/query', data={'query': 'SELECT 1 AS satu'})
    assert resp.get_json()['data'] == [{'satu': 1}]


def test_row_cap(ctx, seed):
    for index in range(3):
        seed('leads', name=f'Prospek {index}')
    result = execute_query('SELECT name FROM leads', max_rows=2)
    assert result.row_count == 2
    assert result.truncated is True


def test_tables_and_columns(admin_client):
    tables = admin_client.get('/app/sql/tables').get_json()['tables']
    assert 'clients' in tables
    assert 'promo_codes' in tables

    columns = admin_client.get('/app/sql/tables/assets').get_json()['columns']
    names = [column['column_name'] for column in columns]
    assert 'id' in names
    assert 'purchase_price' in names
    name_column = next(column for column in columns if column['column_name'] == 'name')
    assert name_column['is_nullable'] == 'NO'

    assert admin_client.get('/app/sql/tables/nope').status_code == 404


def test_describe_unknown_table(ctx):
    assert describe_table('nope') == []


def test_export_xlsx(admin_client, seed):
    seed('clients', name='Rina')
    resp = admin_client.post('/app/sql/export/xlsx', json={'query': 'SELECT name FROM clients'})
    assert resp.status_code == 200
    assert 'query-result-' in resp.headers['Content-Disposition']

    workbook = load_workbook(BytesIO(resp.data))
    sheet = workbook['Hasil']
    assert sheet['A1'].value == 'name'
    assert sheet['A2'].value == 'Rina'
    assert workbook['Query']['B2'].value == 'SELECT name FROM clients'


def test_export_json(admin_client, seed):
    seed('clients', name='Rina')
    resp = admin_client.post('/app/sql/export/json', json={'query': 'SELECT name FROM clients'})
    assert resp.status_code == 200
    assert resp.mimetype == 'application/json'
    assert resp.get_json() == [{'name': 'Rina'}]

    assert admin_client.post('/app/sql/export/csv', json={'query': 'SELECT 1'}).status_code == 404


def test_console_requires_view(member_client):
    member = member_client([View.ASSETS])
    assert member.post('/app/sql/query', json={'query': 'SELECT 1'}).status_code == 403
    assert member.get('/app/sql/tables').status_code == 403


def _client_names(app):
    with app.app_context():
        return [record.name for record in get_service('clients').get_all()]


def test_uncommitted_write_is_rolled_back(ctx):
    result = execute_query(f"INSERT INTO clients (id, name) VALUES ('{uuid4().hex}', 'Dobel')", commit=False)
    assert result.ok
    assert result.row_count == 1
    assert get_service('clients').get_all() == []


def test_export_does_not_apply_statement_again(admin_client, app):
    query = "INSERT INTO clients (id, name) VALUES (lower(hex(randomblob(16))), 'Dobel')"
    assert admin_client.post('/app/sql/query', json={'query': query}).status_code == 200
    assert _client_names(app) == ['Dobel']

    resp = admin_client.post('/app/sql/export/json', json={'query': query})
    assert resp.status_code == 200
    assert resp.get_json() == []
    assert _client_names(app) == ['Dobel']
