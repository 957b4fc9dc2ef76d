"""Table service CRUD against the test database."""

from datetime import date
from decimal import Decimal

import pytest

from studiodesk.services.table_service import (
    RecordNotFound,
    TableServiceError,
    assets_service,
    get_service,
    profile_service,
    promo_codes_service,
)


def test_create_generates_id_and_lists(ctx):
    asset = assets_service.create({
        'name': 'Kamera Canon EOS R5',
        'category': 'Kamera',
        'purchase_price': 25000000,
        'purchase_date': '2024-01-15',
        'status': 'AVAILABLE',
    })
    assert asset.id
    assert asset.purchase_price == Decimal('25000000')
    assert asset.purchase_date == date(2024, 1, 15)

    items = assets_service.get_all()
    assert [item.id for item in items] == [asset.id]


def test_create_keeps_supplied_id(ctx):
    asset = assets_service.create({'id': 'aset-1', 'name': 'Lensa', 'category': 'Lensa', 'purchase_price': 1})
    assert asset.id == 'aset-1'
    assert assets_service.get_by_id('aset-1') is not None


def test_partial_update_touches_only_given_fields(ctx):
    asset = assets_service.create({'name': 'Drone', 'category': 'Drone', 'purchase_price': 9000000})
    updated = assets_service.update(asset.id, {'status': 'MAINTENANCE'})
    assert updated.status == 'MAINTENANCE'
    assert updated.name == 'Drone'
    assert updated.purchase_price == Decimal('9000000')


def test_update_missing_row(ctx):
    with pytest.raises(RecordNotFound):
        assets_service.update('nope', {'status': 'IN_USE'})


def test_delete(ctx):
    asset = assets_service.create({'name': 'Tripod', 'category': 'Aksesoris', 'purchase_price': 500000})
    assets_service.delete(asset.id)
    assert assets_service.get_by_id(asset.id) is None
    # deleting again is a no-op
    assets_service.delete(asset.id)


def test_get_by_id_missing_returns_none(ctx):
    assert assets_service.get_by_id('tidak-ada') is None


def test_unknown_column_rejected(ctx):
    with pytest.raises(TableServiceError) as excinfo:
        assets_service.create({'name': 'Flash', 'warna': 'hitam'})
    assert 'warna' in str(excinfo.value)
    assert excinfo.value.table == 'assets'
    assert assets_service.get_all() == []


def test_bad_value_rejected(ctx):
    with pytest.raises(TableServiceError):
        assets_service.create({'name': 'Flash', 'category': 'Lighting', 'purchase_price': 'mahal'})


def test_constraint_violation_surfaces_as_service_error(ctx):
    promo_codes_service.create({'code': 'HEMAT10', 'discount_type': 'percentage', 'discount_value': 10})
    with pytest.raises(TableServiceError):
        promo_codes_service.create({'code': 'HEMAT10', 'discount_type': 'fixed', 'discount_value': 1})
    # the session was rolled back and stays usable
    assert len(promo_codes_service.get_all()) == 1


def test_get_service():
    assert get_service('assets') is assets_service
    with pytest.raises(TableServiceError):
        get_service('nope')


def test_profile_upsert(ctx):
    assert profile_service.get() is None
    created = profile_service.upsert({'full_name': 'Studio Cahaya', 'email': 'halo@cahaya.id'})
    updated = profile_service.upsert({'company_name': 'Cahaya Abadi'})
    assert updated.id == created.id
    assert updated.full_name == 'Studio Cahaya'
    assert updated.company_name == 'Cahaya Abadi'
