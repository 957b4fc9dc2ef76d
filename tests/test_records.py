"""Generic record endpoints."""

from werkzeug.security import check_password_hash

from studiodesk.domain.enums import View
from studiodesk.models import User
from studiodesk.extensions import db


def test_client_crud(admin_client):
    resp = admin_client.post('/app/records/clients/', json={'name': 'Rina', 'email': 'rina@gmail.com', 'since': '2024-05-01'})
    assert resp.status_code == 201
    body = resp.get_json()
    client_id = body['item']['id']
    assert body['item']['since'] == '2024-05-01'
    assert body['toast']['message'] == 'Klien berhasil ditambahkan'

    resp = admin_client.post(f'/app/records/clients/{client_id}', json={'status': 'Tidak Aktif'})
    assert resp.get_json()['item']['status'] == 'Tidak Aktif'
    assert resp.get_json()['item']['name'] == 'Rina'

    listing = admin_client.get('/app/records/clients/').get_json()
    assert [item['id'] for item in listing['items']] == [client_id]
    assert admin_client.get(f'/app/records/clients/{client_id}').status_code == 200

    resp = admin_client.post(f'/app/records/clients/{client_id}/delete')
    assert resp.get_json()['deleted'] == client_id
    assert admin_client.get(f'/app/records/clients/{client_id}').status_code == 404


def test_unknown_column_is_conflict(admin_client):
    resp = admin_client.post('/app/records/leads/', json={'name': 'Dewi', 'hobi': 'foto'})
    assert resp.status_code == 409
    body = resp.get_json()
    assert 'hobi' in body['error']
    assert body['toast']['category'] == 'danger'


def test_update_missing_record(admin_client):
    resp = admin_client.post('/app/records/leads/nope', json={'status': 'Ditolak'})
    assert resp.status_code == 404
    assert resp.get_json()['toast']['message'].startswith('Error mengupdate prospek')


def test_unknown_table(admin_client):
    assert admin_client.get('/app/records/rahasia/').status_code == 404
    # tables with their own page are not exposed here
    assert admin_client.get('/app/records/assets/').status_code == 404


def test_body_must_be_object(admin_client):
    assert admin_client.post('/app/records/leads/', json=['Dewi']).status_code == 400


def test_member_limited_to_owning_view(member_client):
    member = member_client([View.FINANCE])
    assert member.get('/app/records/transactions/').status_code == 200
    assert member.get('/app/records/cards/').status_code == 200
    assert member.get('/app/records/clients/').status_code == 403
    assert member.get('/app/records/users/').status_code == 403
    # notifications belong to the dashboard every user sees
    assert member.get('/app/records/notifications/').status_code == 200


def test_user_password_is_hashed(app, admin_client):
    resp = admin_client.post('/app/records/users/', json={
        'email': 'editor@studio.test',
        'full_name': 'Editor',
        'role': 'Member',
        'permissions': [View.PROJECTS],
        'password': 'rahasia-editor',
        'password_hash': 'bukan-hash',
    })
    assert resp.status_code == 201
    item = resp.get_json()['item']
    assert 'password_hash' not in item
    assert item['permissions'] == [View.PROJECTS]

    with app.app_context():
        user = db.session.get(User, item['id'])
        assert user.password_hash != 'bukan-hash'
        assert check_password_hash(user.password_hash, 'rahasia-editor')
