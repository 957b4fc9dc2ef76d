"""Freelancer, package, promo code and SOP pages."""

from types import SimpleNamespace

from studiodesk.blueprints.freelancers import routes as freelancer_routes
from studiodesk.domain.enums import View


# Freelancer

def test_freelancer_gets_portal_id(admin_client):
    resp = admin_client.post('/app/freelancers/', json={
        'name': 'Budi Santoso',
        'role': 'Fotografer',
        'email': 'budi@gmail.com',
        'standard_fee': 1500000,
        'rating': 4.5,
    })
    assert resp.status_code == 201
    item = resp.get_json()['item']
    assert item['portal_access_id'].startswith('freelancer_')
    assert item['performance_notes'] == []
    assert item['standard_fee_display'] == 'Rp1.500.000'


def test_freelancers_created_in_same_millisecond(admin_client, monkeypatch):
    monkeypatch.setattr(freelancer_routes, 'time', SimpleNamespace(time=lambda: 1700000000.0))
    ids = []
    for name in ('Budi', 'Sari'):
        resp = admin_client.post('/app/freelancers/', json={'name': name, 'role': 'Fotografer'})
        assert resp.status_code == 201
        ids.append(resp.get_json()['item']['portal_access_id'])

    assert all(portal_id.startswith('freelancer_1700000000000_') for portal_id in ids)
    assert ids[0] != ids[1]


def test_freelancer_validation(admin_client):
    resp = admin_client.post('/app/freelancers/', json={'name': 'Budi', 'role': 'Fotografer', 'rating': 6})
    assert resp.status_code == 400
    assert 'rating' in resp.get_json()['errors']

    resp = admin_client.post('/app/freelancers/', json={'name': 'Budi', 'role': 'Pilot'})
    assert resp.status_code == 400
    assert 'role' in resp.get_json()['errors']


def test_freelancer_filters_and_stats(admin_client):
    admin_client.post('/app/freelancers/', json={'name': 'Budi', 'role': 'Fotografer', 'reward_balance': 200000})
    admin_client.post('/app/freelancers/', json={'name': 'Sari', 'role': 'Editor', 'reward_balance': 50000})

    body = admin_client.get('/app/freelancers/?role=Editor').get_json()
    assert [item['name'] for item in body['items']] == ['Sari']
    assert body['stats']['total'] == 2
    assert body['stats']['by_role']['Fotografer'] == 1
    assert body['stats']['total_reward_balance_display'] == 'Rp250.000'


# Package

PACKAGE = {
    'name': 'Paket Wedding Gold',
    'price': 5000000,
    'physical_items': [
        {'name': 'Album Kolase', 'price': 750000},
        {'name': '', 'price': 100000},
        {'name': 'Cetak 4R', 'price': 0},
    ],
    'digital_items': ['Semua file edit', '', '  '],
    'processing_time': '30 hari kerja',
}


def test_package_items_are_cleaned(admin_client):
    resp = admin_client.post('/app/packages/', json=PACKAGE)
    assert resp.status_code == 201
    item = resp.get_json()['item']
    assert item['price_display'] == 'Rp5.000.000'
    assert item['physical_items'] == [{'name': 'Album Kolase', 'price': 750000.0, 'price_display': 'Rp750.000'}]
    assert item['digital_items'] == ['Semua file edit']


def test_package_partial_edit_keeps_items(admin_client):
    package_id = admin_client.post('/app/packages/', json=PACKAGE).get_json()['item']['id']

    item = admin_client.post(f'/app/packages/{package_id}', json={'price': 6000000}).get_json()['item']
    assert item['price'] == 6000000.0
    assert [entry['name'] for entry in item['physical_items']] == ['Album Kolase']
    assert item['digital_items'] == ['Semua file edit']

    item = admin_client.post(f'/app/packages/{package_id}', json={'digital_items': []}).get_json()['item']
    assert item['digital_items'] == []


def test_package_requires_price(admin_client):
    resp = admin_client.post('/app/packages/', json={'name': 'Tanpa Harga'})
    assert resp.status_code == 400
    assert 'price' in resp.get_json()['errors']


# Promo code

def test_promo_code_created_upper_case(admin_client):
    resp = admin_client.post('/app/promo-codes/', json={
        'code': 'hemat10',
        'description': 'Diskon akhir tahun',
        'discount_type': 'percentage',
        'discount_value': 10,
        'max_usage': 5,
    })
    assert resp.status_code == 201
    item = resp.get_json()['item']
    assert item['code'] == 'HEMAT10'
    assert item['usage_count'] == 0
    assert item['is_active'] is True
    assert item['discount_display'] == '10%'
    assert item['usage_display'] == '0 / 5'
    assert item['is_expired'] is False


def test_promo_code_unlimited_and_fixed(admin_client):
    item = admin_client.post('/app/promo-codes/', json={
        'code': 'POTONG500',
        'discount_type': 'fixed',
        'discount_value': 500000,
        'is_active': False,
    }).get_json()['item']
    assert item['discount_display'] == 'Rp500.000'
    assert item['usage_display'] == '0 / Tanpa batas'
    assert item['is_active'] is False


def test_promo_code_form_post_unchecked_is_inactive(admin_client):
    resp = admin_client.post('/app/promo-codes/', data={
        'code': 'DIAM', 'discount_type': 'fixed', 'discount_value': '1000',
    })
    assert resp.status_code == 201
    assert resp.get_json()['item']['is_active'] is False

    resp = admin_client.post('/app/promo-codes/', data={
        'code': 'NYALA', 'discount_type': 'fixed', 'discount_value': '1000', 'is_active': 'y',
    })
    assert resp.get_json()['item']['is_active'] is True


def test_promo_code_percentage_capped(admin_client):
    resp = admin_client.post('/app/promo-codes/', json={
        'code': 'GRATIS', 'discount_type': 'percentage', 'discount_value': 150,
    })
    assert resp.status_code == 400
    assert 'discount_value' in resp.get_json()['errors']


def test_duplicate_promo_code(admin_client):
    payload = {'code': 'HEMAT10', 'discount_type': 'percentage', 'discount_value': 10}
    assert admin_client.post('/app/promo-codes/', json=payload).status_code == 201

    resp = admin_client.post('/app/promo-codes/', json={**payload, 'code': 'hemat10'})
    assert resp.status_code == 409
    body = resp.get_json()
    assert body['error'].startswith('Error menambahkan promo code')
    assert body['toast']['category'] == 'danger'
    assert len(admin_client.get('/app/promo-codes/').get_json()['items']) == 1


def test_promo_code_stats(admin_client):
    admin_client.post('/app/promo-codes/', json={'code': 'AKTIF', 'discount_type': 'fixed', 'discount_value': 1})
    admin_client.post('/app/promo-codes/', json={
        'code': 'LAMA', 'discount_type': 'fixed', 'discount_value': 1, 'valid_until': '2020-01-01',
    })

    body = admin_client.get('/app/promo-codes/').get_json()
    expired = {item['code']: item['is_expired'] for item in body['items']}
    assert expired == {'AKTIF': False, 'LAMA': True}
    assert body['stats'] == {'total': 2, 'active': 1, 'total_usage': 0}


# SOP

def test_sop_create_and_filter(admin_client):
    resp = admin_client.post('/app/sops/', json={
        'title': 'Alur Editing Foto',
        'category': 'Editing',
        'content': '<p>Seleksi, koreksi warna, ekspor.</p>',
    })
    assert resp.status_code == 201
    item = resp.get_json()['item']
    assert item['last_updated']
    assert resp.get_json()['toast']['message'] == 'SOP berhasil ditambahkan'

    admin_client.post('/app/sops/', json={'title': 'Persiapan Hari H', 'category': 'Lapangan', 'content': 'Cek baterai.'})

    body = admin_client.get('/app/sops/?category=Editing').get_json()
    assert [sop['title'] for sop in body['items']] == ['Alur Editing Foto']
    assert body['stats']['total'] == 2
    assert body['stats']['categories'] == ['Editing', 'Lapangan']
    assert body['stats']['last_updated_display'] != '-'

    body = admin_client.get('/app/sops/?q=baterai').get_json()
    assert [sop['title'] for sop in body['items']] == ['Persiapan Hari H']


def test_sop_edit_stamps_last_updated(admin_client):
    created = admin_client.post('/app/sops/', json={'title': 'A', 'category': 'Umum', 'content': 'x'}).get_json()['item']
    edited = admin_client.post(f'/app/sops/{created["id"]}', json={'content': 'y'}).get_json()['item']
    assert edited['content'] == 'y'
    assert edited['title'] == 'A'
    assert edited['last_updated'] >= created['last_updated']


def test_sop_requires_view(member_client):
    member = member_client([View.ASSETS])
    assert member.get('/app/sops/').status_code == 403
    assert member.post('/app/sops/', json={'title': 'A', 'category': 'B', 'content': 'C'}).status_code == 403
