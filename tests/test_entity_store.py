from types import SimpleNamespace

import pytest

from studiodesk.services.entity_store import EntityStore


class FakeService:
    def __init__(self, rows=None, fail=None):
        self.rows = list(rows or [])
        self.fail = fail or set()
        self.calls = []

    def _check(self, action):
        self.calls.append(action)
        if action in self.fail:
            raise RuntimeError(f'{action} ditolak')

    def get_all(self):
        self._check('get_all')
        return list(self.rows)

    def create(self, fields):
        self._check('create')
        record = SimpleNamespace(id=f'id-{len(self.rows) + 1}', **fields)
        self.rows.append(record)
        return record

    def update(self, record_id, fields):
        self._check('update')
        return SimpleNamespace(id=record_id, **fields)

    def delete(self, record_id):
        self._check('delete')


@pytest.fixture
def notes():
    return []


def _notify(notes):
    return lambda message, category: notes.append((category, message))


def test_autoload_fills_items(notes):
    service = FakeService(rows=[SimpleNamespace(id='a'), SimpleNamespace(id='b')])
    store = EntityStore(service, _notify(notes), 'Aset')
    assert [item.id for item in store.items] == ['a', 'b']
    assert store.loading is False
    assert store.error is None
    assert notes == []


def test_refresh_failure_sets_error(notes):
    store = EntityStore(FakeService(fail={'get_all'}), _notify(notes), 'Aset')
    assert store.items == []
    assert store.error == 'Error memuat aset'
    assert notes == [('danger', 'Error memuat aset')]
    assert store.loading is False


def test_create_prepends_and_notifies_once(notes):
    service = FakeService(rows=[SimpleNamespace(id='lama')])
    store = EntityStore(service, _notify(notes), 'Aset')
    record = store.create({'name': 'Lensa 50mm'})
    assert store.items[0] is record
    assert len(store.items) == 2
    assert notes == [('success', 'Aset berhasil ditambahkan')]


def test_failed_create_leaves_items_untouched(notes):
    service = FakeService(rows=[SimpleNamespace(id='lama')], fail={'create'})
    store = EntityStore(service, _notify(notes), 'Aset')
    with pytest.raises(RuntimeError):
        store.create({'name': 'Lensa 50mm'})
    assert [item.id for item in store.items] == ['lama']
    assert notes == [('danger', 'Error menambahkan aset: create ditolak')]
    assert store.error.startswith('Error menambahkan aset')
    assert store.loading is False


def test_update_replaces_matching_item(notes):
    service = FakeService(rows=[SimpleNamespace(id='a', name='Lama'), SimpleNamespace(id='b', name='B')])
    store = EntityStore(service, _notify(notes), 'Paket')
    store.update('a', {'name': 'Baru'})
    assert [item.name for item in store.items] == ['Baru', 'B']
    assert notes == [('success', 'Paket berhasil diupdate')]


def test_failed_update_and_delete(notes):
    service = FakeService(rows=[SimpleNamespace(id='a')], fail={'update', 'delete'})
    store = EntityStore(service, _notify(notes), 'SOP')
    with pytest.raises(RuntimeError):
        store.update('a', {'title': 'x'})
    with pytest.raises(RuntimeError):
        store.delete('a')
    assert [item.id for item in store.items] == ['a']
    assert [category for category, _ in notes] == ['danger', 'danger']
    assert notes[1][1] == 'Error menghapus sop: delete ditolak'


def test_delete_removes_item(notes):
    service = FakeService(rows=[SimpleNamespace(id='a'), SimpleNamespace(id='b')])
    store = EntityStore(service, _notify(notes), 'Freelancer')
    store.delete('a')
    assert [item.id for item in store.items] == ['b']
    assert store.find('b') is not None
    assert store.find('a') is None
    assert notes == [('success', 'Freelancer berhasil dihapus')]


def test_no_autoload(notes):
    service = FakeService()
    EntityStore(service, _notify(notes), 'Aset', autoload=False)
    assert service.calls == []
