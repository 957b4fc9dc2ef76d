"""Application shell, notifications, signatures and the studio profile."""

from studiodesk.domain.enums import View
from studiodesk.services import table_service as ts
from studiodesk.services.workspace import COLLECTIONS


def test_shell_snapshot(admin_client, seed):
    seed('transactions', description='DP Wedding', amount=2000000, type='Pemasukan')
    seed('transactions', description='Sewa lensa', amount=500000, type='Pengeluaran')
    seed('notifications', title='Halo', message='Selamat datang')

    resp = admin_client.get('/app/?view=Keuangan')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['active_view'] == View.FINANCE
    assert body['views'] == list(View.ALL)
    assert set(body['collections']) == set(COLLECTIONS)
    assert len(body['collections']['users']) == 1
    assert 'password_hash' not in body['collections']['users'][0]
    assert body['profile'] is None
    assert body['error'] is None

    summary = body['summary']
    assert summary['total_income_display'] == 'Rp2.000.000'
    assert summary['total_expense_display'] == 'Rp500.000'
    assert summary['balance_display'] == 'Rp1.500.000'
    assert summary['unread_notifications'] == 1
    assert summary['counts']['transactions'] == 2


def test_unknown_view_falls_back_to_dashboard(admin_client):
    body = admin_client.get('/app/?view=Rahasia').get_json()
    assert body['active_view'] == View.DASHBOARD


def test_anonymous_shell(client):
    resp = client.get('/app/')
    assert resp.status_code == 401


def test_member_denied_view(member_client):
    member = member_client([View.ASSETS])
    resp = member.get('/app/?view=SOP')
    assert resp.status_code == 403
    body = resp.get_json()
    assert body['error'] == 'access_denied'
    assert body['toast']['message'] == 'Anda tidak memiliki izin untuk mengakses halaman ini.'

    body = member.get('/app/').get_json()
    assert body['views'] == [View.DASHBOARD, View.ASSETS]


def test_load_failure_empties_workspace(admin_client, seed, monkeypatch):
    seed('clients', name='Rina')

    def boom():
        raise ts.TableServiceError('connection reset', table='assets')

    monkeypatch.setattr(ts.assets_service, 'get_all', boom)
    resp = admin_client.get('/app/')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['error'] == 'Error loading data from database'
    assert body['toast'] == {'message': 'Error loading data from database', 'category': 'danger'}
    assert all(rows == [] for rows in body['collections'].values())


def test_notifications_read(admin_client, seed):
    first = seed('notifications', title='Satu', message='a')
    seed('notifications', title='Dua', message='b')
    seed('notifications', title='Tiga', message='c', is_read=True)

    resp = admin_client.post(f'/app/notifications/{first["id"]}/read')
    assert resp.status_code == 200
    assert resp.get_json()['item']['is_read'] is True

    resp = admin_client.post('/app/notifications/read-all')
    assert resp.get_json()['updated'] == 1

    assert admin_client.post('/app/notifications/nope/read').status_code == 404


def test_sign_contract(admin_client, seed):
    contract = seed('contracts', contract_number='KTR-001', client_name1='Rina')

    resp = admin_client.post(f'/app/contracts/{contract["id"]}/sign', json={'signature': 'data:image/png;base64,AAAA'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['item']['vendor_signature'] == 'data:image/png;base64,AAAA'
    assert body['item']['client_signature'] is None
    assert body['toast']['message'] == 'Tanda tangan berhasil disimpan'

    resp = admin_client.post(f'/app/contracts/{contract["id"]}/sign', json={'signature': ''})
    assert resp.status_code == 400

    resp = admin_client.post('/app/contracts/nope/sign', json={'signature': 'x'})
    assert resp.status_code == 404


def test_sign_invoice_transaction_and_payment_record(admin_client, seed):
    project = seed('projects', project_name='Wedding Rina')
    transaction = seed('transactions', description='DP', amount=1, type='Pemasukan')
    record = seed('team_payment_records', record_number='SLIP-1')

    body = admin_client.post(f'/app/projects/{project["id"]}/invoice/sign', json={'signature': 'sig-a'}).get_json()
    assert body['item']['invoice_signature'] == 'sig-a'
    body = admin_client.post(f'/app/transactions/{transaction["id"]}/sign', json={'signature': 'sig-b'}).get_json()
    assert body['item']['vendor_signature'] == 'sig-b'
    body = admin_client.post(f'/app/team-payment-records/{record["id"]}/sign', json={'signature': 'sig-c'}).get_json()
    assert body['item']['vendor_signature'] == 'sig-c'


def test_profile_update(admin_client):
    assert admin_client.get('/app/profile').get_json()['profile'] is None

    resp = admin_client.post('/app/profile', json={
        'full_name': 'Studio Cahaya',
        'email': 'halo.cahaya@gmail.com',
        'project_types': ['Pernikahan', 'Prewedding'],
        'notification_settings': {'newProject': False},
    })
    assert resp.status_code == 200
    profile = resp.get_json()['profile']
    assert profile['project_types'] == ['Pernikahan', 'Prewedding']
    assert profile['notification_settings'] == {'newProject': False}
    assert resp.get_json()['toast']['message'] == 'Profil berhasil diupdate'

    resp = admin_client.post('/app/profile', json={'company_name': 'Cahaya Abadi'})
    profile = resp.get_json()['profile']
    assert profile['company_name'] == 'Cahaya Abadi'
    assert profile['full_name'] == 'Studio Cahaya'
    assert profile['project_types'] == ['Pernikahan', 'Prewedding']


def test_profile_rejects_bad_email(admin_client):
    resp = admin_client.post('/app/profile', json={'email': 'bukan-email'})
    assert resp.status_code == 400


def test_settings_view_required(member_client):
    member = member_client([View.ASSETS])
    assert member.get('/app/profile').status_code == 403
