"""Manajemen Aset page."""

from studiodesk.domain.enums import View
from studiodesk.services.table_service import TableServiceError, assets_service


CAMERA = {
    'name': 'Kamera Canon EOS R5',
    'category': 'Kamera',
    'purchase_price': 25000000,
    'purchase_date': '2024-01-15',
    'serial_number': 'CN-0001',
    'status': 'AVAILABLE',
}


def test_create_asset(admin_client):
    resp = admin_client.post('/app/assets/', json=CAMERA)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['ok'] is True
    assert body['toast'] == {'message': 'Aset berhasil ditambahkan', 'category': 'success'}
    assert body['item']['purchase_price_display'] == 'Rp25.000.000'
    assert body['item']['purchase_date_display'] == '15/1/2024'
    assert body['item']['status_label'] == 'Tersedia'


def test_list_with_stats(admin_client):
    admin_client.post('/app/assets/', json=CAMERA)
    admin_client.post('/app/assets/', json={
        'name': 'Lampu Godox', 'category': 'Lighting', 'purchase_price': 3500000, 'status': 'IN_USE',
    })

    body = admin_client.get('/app/assets/').get_json()
    assert len(body['items']) == 2
    assert body['stats']['total'] == 2
    assert body['stats']['total_value_display'] == 'Rp28.500.000'
    assert body['stats']['by_status'] == {'AVAILABLE': 1, 'IN_USE': 1, 'MAINTENANCE': 0}
    assert body['stats']['categories'] == ['Kamera', 'Lighting']
    assert body['error'] is None


def test_filters(admin_client):
    admin_client.post('/app/assets/', json=CAMERA)
    admin_client.post('/app/assets/', json={
        'name': 'Lampu Godox', 'category': 'Lighting', 'purchase_price': 3500000, 'status': 'IN_USE',
    })

    by_text = admin_client.get('/app/assets/?q=cn-0001').get_json()
    assert [item['name'] for item in by_text['items']] == ['Kamera Canon EOS R5']

    by_status = admin_client.get('/app/assets/?status=in_use').get_json()
    assert [item['name'] for item in by_status['items']] == ['Lampu Godox']
    # stats always describe the full collection
    assert by_status['stats']['total'] == 2


def test_validation_errors(admin_client):
    resp = admin_client.post('/app/assets/', json={'name': '', 'category': 'Kamera', 'purchase_price': -1})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body['error'] == 'validation_failed'
    assert 'name' in body['errors']
    assert 'purchase_price' in body['errors']

    resp = admin_client.post('/app/assets/', json={**CAMERA, 'status': 'HILANG'})
    assert resp.status_code == 400
    assert 'status' in resp.get_json()['errors']


def test_edit_keeps_unsubmitted_fields(admin_client):
    asset_id = admin_client.post('/app/assets/', json=CAMERA).get_json()['item']['id']

    resp = admin_client.post(f'/app/assets/{asset_id}', json={'status': 'MAINTENANCE'})
    assert resp.status_code == 200
    item = resp.get_json()['item']
    assert item['status'] == 'MAINTENANCE'
    assert item['name'] == 'Kamera Canon EOS R5'
    assert item['purchase_price_display'] == 'Rp25.000.000'
    assert resp.get_json()['toast']['message'] == 'Aset berhasil diupdate'


def test_detail_and_delete(admin_client):
    asset_id = admin_client.post('/app/assets/', json=CAMERA).get_json()['item']['id']

    assert admin_client.get(f'/app/assets/{asset_id}').status_code == 200

    resp = admin_client.post(f'/app/assets/{asset_id}/delete')
    assert resp.status_code == 200
    assert resp.get_json()['toast']['message'] == 'Aset berhasil dihapus'
    assert admin_client.get(f'/app/assets/{asset_id}').status_code == 404
    assert admin_client.post('/app/assets/nope', json={'status': 'IN_USE'}).status_code == 404


def test_load_failure(admin_client, monkeypatch):
    def boom():
        raise TableServiceError('connection refused', table='assets')

    monkeypatch.setattr(assets_service, 'get_all', boom)
    resp = admin_client.get('/app/assets/')
    assert resp.status_code == 500
    body = resp.get_json()
    assert body['items'] == []
    assert body['error'] == 'Error memuat aset'
    assert body['toast'] == {'message': 'Error memuat aset', 'category': 'danger'}


def test_create_failure_reports_once(admin_client, monkeypatch):
    def boom(fields):
        raise TableServiceError('disk full', table='assets')

    monkeypatch.setattr(assets_service, 'create', boom)
    resp = admin_client.post('/app/assets/', json=CAMERA)
    assert resp.status_code == 409
    body = resp.get_json()
    assert body['error'] == 'Error menambahkan aset: disk full'
    assert body['toast']['category'] == 'danger'


def test_requires_login(client):
    resp = client.get('/app/assets/')
    assert resp.status_code == 401
    assert resp.get_json()['error'] == 'login_required'


def test_member_without_view_is_denied(member_client):
    member = member_client([View.SOP])
    resp = member.get('/app/assets/')
    assert resp.status_code == 403
    body = resp.get_json()
    assert body['title'] == 'Akses Ditolak'
    assert body['fallback_view'] == View.DASHBOARD


def test_member_with_view(member_client):
    member = member_client([View.ASSETS])
    assert member.get('/app/assets/').status_code == 200
