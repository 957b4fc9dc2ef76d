"""Generic per-table CRUD services.

``create_crud_service(Model)`` returns an object exposing get_all / get_by_id /
create / update / delete against one table. Every call maps to exactly one
statement and commits on its own. Store errors roll the session back and
surface as :class:`TableServiceError`; the only condition swallowed is a
missing row on ``get_by_id``.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, Mapping, Optional, Type, TypeVar

import sqlalchemy as sa
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from studiodesk.extensions import db
from studiodesk import models


T = TypeVar('T')


class TableServiceError(Exception):
    """A store call failed. ``str(exc)`` carries the backend message."""

    def __init__(self, message: str, table: str | None = None):
        super().__init__(message)
        self.table = table


class RecordNotFound(TableServiceError):
    pass


def _parse_date(value: Any) -> Optional[date]:
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace('Z', '+00:00')).date()


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    # Columns are naive UTC.
    return parsed.replace(tzinfo=None)


def _coerce_value(column: sa.Column, value: Any) -> Any:
    """Convert JSON-ish input into what the column type binds."""

    if value is None:
        return None
    column_type = column.type
    try:
        if isinstance(column_type, sa.DateTime):
            return _parse_datetime(value)
        if isinstance(column_type, sa.Date):
            return _parse_date(value)
        if isinstance(column_type, sa.Numeric) and not isinstance(column_type, sa.Float):
            return Decimal(str(value)) if value != '' else None
        if isinstance(column_type, sa.Float):
            return float(value) if value != '' else None
        if isinstance(column_type, sa.Integer):
            return int(value) if value != '' else None
        if isinstance(column_type, sa.Boolean) and isinstance(value, str):
            return value.strip().lower() in ('1', 'true', 'yes', 'on')
    except (TypeError, ValueError, InvalidOperation) as exc:
        raise TableServiceError(f'Nilai tidak valid untuk kolom {column.key}: {value!r}') from exc
    return value


class TableService(Generic[T]):
    """CRUD operations against one named table."""

    def __init__(self, model: Type[T]):
        self.model = model
        self.table_name: str = model.__tablename__
        self._columns = {column.key: column for column in model.__table__.columns}

    def __repr__(self):
        return f'<TableService {self.table_name}>'

    def _prepare(self, fields: Mapping[str, Any], *, allow_id: bool) -> dict[str, Any]:
        unknown = [key for key in fields if key not in self._columns]
        if unknown:
            raise TableServiceError(
                f'Kolom tidak dikenal untuk tabel {self.table_name}: {", ".join(sorted(unknown))}',
                table=self.table_name,
            )
        prepared = {}
        for key, value in fields.items():
            if key == 'id' and not allow_id:
                continue
            prepared[key] = _coerce_value(self._columns[key], value)
        return prepared

    def _fail(self, action: str, exc: SQLAlchemyError) -> TableServiceError:
        try:
            db.session.rollback()
        except Exception as rollback_exc:
            current_app.logger.error('Rollback after %s on %s failed: %s', action, self.table_name, rollback_exc)
        message = str(getattr(exc, 'orig', None) or exc)
        current_app.logger.warning('%s on %s failed: %s', action, self.table_name, message)
        return TableServiceError(message, table=self.table_name)

    def get_all(self) -> list[T]:
        try:
            return list(db.session.execute(sa.select(self.model)).scalars().all())
        except SQLAlchemyError as exc:
            raise self._fail('select', exc) from exc

    def get_by_id(self, record_id: str) -> Optional[T]:
        try:
            return db.session.get(self.model, str(record_id))
        except SQLAlchemyError as exc:
            raise self._fail('select', exc) from exc

    def create(self, fields: Mapping[str, Any]) -> T:
        values = self._prepare(fields, allow_id=True)
        if not values.get('id'):
            values.pop('id', None)
        record = self.model(**values)
        try:
            db.session.add(record)
            db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('insert', exc) from exc
        return record

    def update(self, record_id: str, fields: Mapping[str, Any]) -> T:
        values = self._prepare(fields, allow_id=False)
        record = self.get_by_id(record_id)
        if record is None:
            raise RecordNotFound(f'Data {record_id} tidak ditemukan di {self.table_name}', table=self.table_name)
        for key, value in values.items():
            setattr(record, key, value)
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('update', exc) from exc
        return record

    def delete(self, record_id: str) -> None:
        try:
            db.session.execute(sa.delete(self.model).where(self.model.id == str(record_id)))
            db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('delete', exc) from exc


def create_crud_service(model: Type[T]) -> TableService[T]:
    return TableService(model)


class ProfileService:
    """The studio profile is a single row rather than a collection."""

    def __init__(self):
        self._table = TableService(models.Profile)

    def get(self) -> Optional[models.Profile]:
        try:
            return db.session.execute(sa.select(models.Profile).limit(1)).scalars().first()
        except SQLAlchemyError as exc:
            raise self._table._fail('select', exc) from exc

    def upsert(self, fields: Mapping[str, Any]) -> models.Profile:
        existing = self.get()
        if existing is None:
            return self._table.create(fields)
        return self._table.update(existing.id, fields)


users_service = create_crud_service(models.User)
clients_service = create_crud_service(models.Client)
projects_service = create_crud_service(models.Project)
team_members_service = create_crud_service(models.TeamMember)
transactions_service = create_crud_service(models.Transaction)
packages_service = create_crud_service(models.Package)
add_ons_service = create_crud_service(models.AddOn)
pockets_service = create_crud_service(models.FinancialPocket)
team_project_payments_service = create_crud_service(models.TeamProjectPayment)
team_payment_records_service = create_crud_service(models.TeamPaymentRecord)
leads_service = create_crud_service(models.Lead)
reward_ledger_entries_service = create_crud_service(models.RewardLedgerEntry)
cards_service = create_crud_service(models.Card)
assets_service = create_crud_service(models.Asset)
client_feedback_service = create_crud_service(models.ClientFeedback)
contracts_service = create_crud_service(models.Contract)
notifications_service = create_crud_service(models.Notification)
social_media_posts_service = create_crud_service(models.SocialMediaPost)
promo_codes_service = create_crud_service(models.PromoCode)
sops_service = create_crud_service(models.SOP)
calendar_events_service = create_crud_service(models.CalendarEvent)
profile_service = ProfileService()


SERVICES: dict[str, TableService] = {
    service.table_name: service
    for service in (
        users_service,
        clients_service,
        projects_service,
        team_members_service,
        transactions_service,
        packages_service,
        add_ons_service,
        pockets_service,
        team_project_payments_service,
        team_payment_records_service,
        leads_service,
        reward_ledger_entries_service,
        cards_service,
        assets_service,
        client_feedback_service,
        contracts_service,
        notifications_service,
        social_media_posts_service,
        promo_codes_service,
        sops_service,
        calendar_events_service,
    )
}


def get_service(table_name: str) -> TableService:
    try:
        return SERVICES[table_name]
    except KeyError:
        raise TableServiceError(f'Tabel tidak dikenal: {table_name}', table=table_name) from None
