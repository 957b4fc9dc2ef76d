"""
Database Models for the StudioDesk Application

Every business entity is a flat record keyed by a generated string id.
Relations (project -> client, payment -> team member, ...) are opaque id
strings; the store does not enforce them. Embedded arrays live in JSON
columns.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from studiodesk.extensions import db, login_manager


def generate_id() -> str:
    return uuid4().hex


class RecordMixin:
    """Shared id column and JSON serialization for every table."""

    __serialize_exclude__: tuple = ()

    id = db.Column(db.String(36), primary_key=True, default=generate_id)

    def to_dict(self) -> dict:
        data = {}
        for column in self.__table__.columns:
            if column.key in self.__serialize_exclude__:
                continue
            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = float(value)
            data[column.key] = value
        return data

    def __repr__(self):
        return f'<{type(self).__name__} {self.id}>'


@login_manager.user_loader
def load_user(user_id):
    """Load user by ID for Flask-Login"""
    try:
        if user_id is None:
            return None
        return db.session.get(User, str(user_id))
    except Exception:
        try:
            db.session.rollback()
        except Exception:
            pass
        return None


class User(RecordMixin, UserMixin, db.Model):
    """Dashboard account. ``permissions`` lists the views a Member may open."""

    __tablename__ = 'users'
    __serialize_exclude__ = ('password_hash',)

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(200), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='Member')
    permissions = db.Column(db.JSON, nullable=False, default=list)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    def set_password(self, password):
        """Hash and set user password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash:
            return False
        try:
            return check_password_hash(self.password_hash, password)
        except Exception:
            return False

    @property
    def is_admin(self):
        return self.role == 'Admin'


class Profile(RecordMixin, db.Model):
    """Studio (vendor) profile. A single row is expected."""

    __tablename__ = 'profiles'

    full_name = db.Column(db.String(200), nullable=False, default='')
    email = db.Column(db.String(255), nullable=False, default='')
    phone = db.Column(db.String(40), default='')
    company_name = db.Column(db.String(200), default='')
    website = db.Column(db.String(255), default='')
    address = db.Column(db.Text, default='')
    bank_account = db.Column(db.String(200), default='')
    authorized_signer = db.Column(db.String(200), default='')
    bio = db.Column(db.Text, default='')
    income_categories = db.Column(db.JSON, default=list)
    expense_categories = db.Column(db.JSON, default=list)
    project_types = db.Column(db.JSON, default=list)
    event_types = db.Column(db.JSON, default=list)
    asset_categories = db.Column(db.JSON, default=list)
    sop_categories = db.Column(db.JSON, default=list)
    project_status_config = db.Column(db.JSON, default=list)
    notification_settings = db.Column(db.JSON, default=dict)
    security_settings = db.Column(db.JSON, default=dict)
    briefing_template = db.Column(db.Text, default='')


class Client(RecordMixin, db.Model):
    __tablename__ = 'clients'

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(40))
    whatsapp = db.Column(db.String(40))
    instagram = db.Column(db.String(100))
    client_type = db.Column(db.String(40), default='Langsung')
    status = db.Column(db.String(40), default='Aktif')
    since = db.Column(db.Date, default=date.today)
    last_contact = db.Column(db.DateTime, default=datetime.utcnow)
    portal_access_id = db.Column(db.String(120), unique=True, index=True)


class Project(RecordMixin, db.Model):
    __tablename__ = 'projects'

    project_name = db.Column(db.String(200), nullable=False)
    client_id = db.Column(db.String(36), index=True)
    client_name = db.Column(db.String(200))
    project_type = db.Column(db.String(100))
    package_id = db.Column(db.String(36))
    package_name = db.Column(db.String(200))
    add_on_ids = db.Column(db.JSON, default=list)
    location = db.Column(db.String(255))
    date = db.Column(db.Date)
    deadline_date = db.Column(db.Date)
    status = db.Column(db.String(60), default='Dikonfirmasi')
    progress = db.Column(db.Integer, default=0)
    total_cost = db.Column(db.Numeric(14, 2), default=0)
    amount_paid = db.Column(db.Numeric(14, 2), default=0)
    payment_status = db.Column(db.String(40), default='Belum Bayar')
    promo_code_id = db.Column(db.String(36))
    discount_amount = db.Column(db.Numeric(14, 2), default=0)
    notes = db.Column(db.Text)
    revisions = db.Column(db.JSON, default=list)
    confirmed_sub_statuses = db.Column(db.JSON, default=list)
    client_sub_status_notes = db.Column(db.JSON, default=dict)
    is_editing_confirmed_by_client = db.Column(db.Boolean, default=False)
    is_printing_confirmed_by_client = db.Column(db.Boolean, default=False)
    is_delivery_confirmed_by_client = db.Column(db.Boolean, default=False)
    invoice_signature = db.Column(db.Text)


class TeamMember(RecordMixin, db.Model):
    __tablename__ = 'team_members'

    name = db.Column(db.String(200), nullable=False)
    role = db.Column(db.String(60), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(40))
    standard_fee = db.Column(db.Numeric(14, 2), default=0)
    no_rek = db.Column(db.String(100))
    reward_balance = db.Column(db.Numeric(14, 2), default=0)
    rating = db.Column(db.Float, default=0)
    performance_notes = db.Column(db.JSON, default=list)
    portal_access_id = db.Column(db.String(120), unique=True, index=True)


class Transaction(RecordMixin, db.Model):
    __tablename__ = 'transactions'

    date = db.Column(db.Date, default=date.today)
    description = db.Column(db.String(300), nullable=False)
    amount = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    type = db.Column(db.String(20), nullable=False)
    project_id = db.Column(db.String(36), index=True)
    category = db.Column(db.String(100))
    method = db.Column(db.String(40))
    pocket_id = db.Column(db.String(36))
    card_id = db.Column(db.String(36))
    vendor_signature = db.Column(db.Text)


class Package(RecordMixin, db.Model):
    __tablename__ = 'packages'

    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    physical_items = db.Column(db.JSON, default=list)
    digital_items = db.Column(db.JSON, default=list)
    processing_time = db.Column(db.String(100))
    default_printing_cost = db.Column(db.Numeric(14, 2), default=0)
    default_transport_cost = db.Column(db.Numeric(14, 2), default=0)
    photographers = db.Column(db.String(100))
    videographers = db.Column(db.String(100))


class AddOn(RecordMixin, db.Model):
    __tablename__ = 'add_ons'

    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Numeric(14, 2), nullable=False, default=0)


class FinancialPocket(RecordMixin, db.Model):
    __tablename__ = 'financial_pockets'

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    icon = db.Column(db.String(40))
    type = db.Column(db.String(60))
    amount = db.Column(db.Numeric(14, 2), default=0)
    goal_amount = db.Column(db.Numeric(14, 2))
    lock_end_date = db.Column(db.Date)
    source_card_id = db.Column(db.String(36))


class TeamProjectPayment(RecordMixin, db.Model):
    __tablename__ = 'team_project_payments'

    project_id = db.Column(db.String(36), index=True)
    team_member_id = db.Column(db.String(36), index=True)
    team_member_name = db.Column(db.String(200))
    date = db.Column(db.Date, default=date.today)
    status = db.Column(db.String(20), default='Unpaid')
    fee = db.Column(db.Numeric(14, 2), default=0)
    reward = db.Column(db.Numeric(14, 2), default=0)


class TeamPaymentRecord(RecordMixin, db.Model):
    __tablename__ = 'team_payment_records'

    record_number = db.Column(db.String(60))
    team_member_id = db.Column(db.String(36), index=True)
    date = db.Column(db.Date, default=date.today)
    project_payment_ids = db.Column(db.JSON, default=list)
    total_amount = db.Column(db.Numeric(14, 2), default=0)
    vendor_signature = db.Column(db.Text)


class Lead(RecordMixin, db.Model):
    __tablename__ = 'leads'

    name = db.Column(db.String(200), nullable=False)
    contact_channel = db.Column(db.String(60))
    location = db.Column(db.String(255))
    status = db.Column(db.String(60), default='Sedang Diskusi')
    date = db.Column(db.Date, default=date.today)
    notes = db.Column(db.Text)
    whatsapp = db.Column(db.String(40))


class RewardLedgerEntry(RecordMixin, db.Model):
    __tablename__ = 'reward_ledger_entries'

    team_member_id = db.Column(db.String(36), index=True)
    date = db.Column(db.Date, default=date.today)
    description = db.Column(db.String(300))
    amount = db.Column(db.Numeric(14, 2), default=0)
    project_id = db.Column(db.String(36))


class Card(RecordMixin, db.Model):
    __tablename__ = 'cards'

    card_holder_name = db.Column(db.String(200))
    bank_name = db.Column(db.String(100), nullable=False)
    card_type = db.Column(db.String(40))
    last_four_digits = db.Column(db.String(4))
    expiry_date = db.Column(db.String(7))
    balance = db.Column(db.Numeric(14, 2), default=0)
    color_gradient = db.Column(db.String(120))


class Asset(RecordMixin, db.Model):
    __tablename__ = 'assets'

    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(100), nullable=False, default='')
    purchase_date = db.Column(db.Date)
    purchase_price = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    serial_number = db.Column(db.String(120))
    status = db.Column(db.String(20), nullable=False, default='AVAILABLE')
    notes = db.Column(db.Text)


class ClientFeedback(RecordMixin, db.Model):
    __tablename__ = 'client_feedback'

    client_name = db.Column(db.String(200), nullable=False)
    satisfaction = db.Column(db.String(40))
    rating = db.Column(db.Integer, default=0)
    feedback = db.Column(db.Text)
    date = db.Column(db.Date, default=date.today)


class Contract(RecordMixin, db.Model):
    __tablename__ = 'contracts'

    contract_number = db.Column(db.String(60), index=True)
    client_id = db.Column(db.String(36), index=True)
    project_id = db.Column(db.String(36), index=True)
    signing_date = db.Column(db.Date)
    signing_location = db.Column(db.String(200))
    client_name1 = db.Column(db.String(200))
    client_address1 = db.Column(db.Text)
    client_phone1 = db.Column(db.String(40))
    scope_of_work = db.Column(db.Text)
    total_cost = db.Column(db.Numeric(14, 2), default=0)
    jurisdiction = db.Column(db.String(200))
    vendor_signature = db.Column(db.Text)
    client_signature = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class Notification(RecordMixin, db.Model):
    """In-app notification shown in the header bell (not the toast)."""

    __tablename__ = 'notifications'

    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)
    is_read = db.Column(db.Boolean, default=False)
    icon = db.Column(db.String(40))
    link_view = db.Column(db.String(60))
    link_action = db.Column(db.JSON)


class SocialMediaPost(RecordMixin, db.Model):
    __tablename__ = 'social_media_posts'

    project_id = db.Column(db.String(36))
    client_name = db.Column(db.String(200))
    post_type = db.Column(db.String(60))
    platform = db.Column(db.String(60))
    scheduled_date = db.Column(db.Date)
    caption = db.Column(db.Text)
    media_url = db.Column(db.String(600))
    status = db.Column(db.String(40), default='Draf')
    notes = db.Column(db.Text)


class PromoCode(RecordMixin, db.Model):
    __tablename__ = 'promo_codes'

    code = db.Column(db.String(60), unique=True, nullable=False, index=True)
    description = db.Column(db.String(300), default='')
    discount_type = db.Column(db.String(20), nullable=False, default='percentage')
    discount_value = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    min_order_amount = db.Column(db.Numeric(14, 2), default=0)
    max_usage = db.Column(db.Integer, default=0)
    usage_count = db.Column(db.Integer, default=0)
    valid_from = db.Column(db.Date)
    valid_until = db.Column(db.Date)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class SOP(RecordMixin, db.Model):
    __tablename__ = 'sops'

    title = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(100), nullable=False, default='')
    content = db.Column(db.Text, nullable=False, default='')
    last_updated = db.Column(db.DateTime, default=datetime.utcnow)


class CalendarEvent(RecordMixin, db.Model):
    __tablename__ = 'calendar_events'

    title = db.Column(db.String(200), nullable=False)
    date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.String(5))
    end_time = db.Column(db.String(5))
    event_type = db.Column(db.String(60))
    notes = db.Column(db.Text)
