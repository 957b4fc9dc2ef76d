from __future__ import annotations

from typing import Any, Callable, Generic, Mapping, Optional, Protocol, TypeVar


T = TypeVar('T')

Notifier = Callable[[str, str], None]


class CrudService(Protocol[T]):
    def get_all(self) -> list[T]: ...

    def create(self, fields: Mapping[str, Any]) -> T: ...

    def update(self, record_id: str, fields: Mapping[str, Any]) -> T: ...

    def delete(self, record_id: str) -> None: ...


def _error_text(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class EntityStore(Generic[T]):
    """Local list state wrapped around one table service.

    Mirrors what every dashboard page needs: the current ``items``, a
    ``loading`` flag held only while a call is in flight, and the last
    ``error``. Mutations reconcile ``items`` only after the store accepted
    them, send exactly one notification (success or failure) and re-raise
    failures so callers can skip their own reset logic.
    """

    def __init__(
        self,
        service: CrudService[T],
        notify: Notifier,
        entity_name: str,
        autoload: bool = True,
    ):
        self.service = service
        self.notify = notify
        self.entity_name = entity_name
        self.items: list[T] = []
        self.loading = False
        self.error: Optional[str] = None
        if autoload:
            self.refresh()

    @property
    def _label(self) -> str:
        return self.entity_name.lower()

    def set_items(self, items: list[T]) -> None:
        self.items = list(items)

    def refresh(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.items = list(self.service.get_all())
        except Exception:
            self.error = f'Error memuat {self._label}'
            self.notify(self.error, 'danger')
        finally:
            self.loading = False

    def create(self, fields: Mapping[str, Any]) -> T:
        self.loading = True
        self.error = None
        try:
            record = self.service.create(fields)
        except Exception as exc:
            self.error = f'Error menambahkan {self._label}: {_error_text(exc)}'
            self.notify(self.error, 'danger')
            raise
        finally:
            self.loading = False
        self.items = [record, *self.items]
        self.notify(f'{self.entity_name} berhasil ditambahkan', 'success')
        return record

    def update(self, record_id: str, fields: Mapping[str, Any]) -> T:
        self.loading = True
        self.error = None
        try:
            record = self.service.update(record_id, fields)
        except Exception as exc:
            self.error = f'Error mengupdate {self._label}: {_error_text(exc)}'
            self.notify(self.error, 'danger')
            raise
        finally:
            self.loading = False
        self.items = [record if getattr(item, 'id', None) == record_id else item for item in self.items]
        self.notify(f'{self.entity_name} berhasil diupdate', 'success')
        return record

    def delete(self, record_id: str) -> None:
        self.loading = True
        self.error = None
        try:
            self.service.delete(record_id)
        except Exception as exc:
            self.error = f'Error menghapus {self._label}: {_error_text(exc)}'
            self.notify(self.error, 'danger')
            raise
        finally:
            self.loading = False
        self.items = [item for item in self.items if getattr(item, 'id', None) != record_id]
        self.notify(f'{self.entity_name} berhasil dihapus', 'success')

    def find(self, record_id: str) -> Optional[T]:
        for item in self.items:
            if getattr(item, 'id', None) == record_id:
                return item
        return None
