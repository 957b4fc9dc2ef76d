"""Initial schema

Revision ID: 0000_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0000_initial'
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', sa.String(length=36), primary_key=True)


def _money(name, nullable=True):
    return sa.Column(name, sa.Numeric(14, 2), nullable=nullable)


def upgrade():
    op.create_table(
        'users',
        _id(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    op.create_table(
        'profiles',
        _id(),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=40)),
        sa.Column('company_name', sa.String(length=200)),
        sa.Column('website', sa.String(length=255)),
        sa.Column('address', sa.Text()),
        sa.Column('bank_account', sa.String(length=200)),
        sa.Column('authorized_signer', sa.String(length=200)),
        sa.Column('bio', sa.Text()),
        sa.Column('income_categories', sa.JSON()),
        sa.Column('expense_categories', sa.JSON()),
        sa.Column('project_types', sa.JSON()),
        sa.Column('event_types', sa.JSON()),
        sa.Column('asset_categories', sa.JSON()),
        sa.Column('sop_categories', sa.JSON()),
        sa.Column('project_status_config', sa.JSON()),
        sa.Column('notification_settings', sa.JSON()),
        sa.Column('security_settings', sa.JSON()),
        sa.Column('briefing_template', sa.Text()),
    )

    op.create_table(
        'clients',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255)),
        sa.Column('phone', sa.String(length=40)),
        sa.Column('whatsapp', sa.String(length=40)),
        sa.Column('instagram', sa.String(length=100)),
        sa.Column('client_type', sa.String(length=40)),
        sa.Column('status', sa.String(length=40)),
        sa.Column('since', sa.Date()),
        sa.Column('last_contact', sa.DateTime()),
        sa.Column('portal_access_id', sa.String(length=120)),
        sa.UniqueConstraint('portal_access_id', name='uq_clients_portal_access_id'),
    )
    op.create_index('ix_clients_portal_access_id', 'clients', ['portal_access_id'], unique=False)

    op.create_table(
        'projects',
        _id(),
        sa.Column('project_name', sa.String(length=200), nullable=False),
        sa.Column('client_id', sa.String(length=36)),
        sa.Column('client_name', sa.String(length=200)),
        sa.Column('project_type', sa.String(length=100)),
        sa.Column('package_id', sa.String(length=36)),
        sa.Column('package_name', sa.String(length=200)),
        sa.Column('add_on_ids', sa.JSON()),
        sa.Column('location', sa.String(length=255)),
        sa.Column('date', sa.Date()),
        sa.Column('deadline_date', sa.Date()),
        sa.Column('status', sa.String(length=60)),
        sa.Column('progress', sa.Integer()),
        _money('total_cost'),
        _money('amount_paid'),
        sa.Column('payment_status', sa.String(length=40)),
        sa.Column('promo_code_id', sa.String(length=36)),
        _money('discount_amount'),
        sa.Column('notes', sa.Text()),
        sa.Column('revisions', sa.JSON()),
        sa.Column('confirmed_sub_statuses', sa.JSON()),
        sa.Column('client_sub_status_notes', sa.JSON()),
        sa.Column('is_editing_confirmed_by_client', sa.Boolean()),
        sa.Column('is_printing_confirmed_by_client', sa.Boolean()),
        sa.Column('is_delivery_confirmed_by_client', sa.Boolean()),
        sa.Column('invoice_signature', sa.Text()),
    )
    op.create_index('ix_projects_client_id', 'projects', ['client_id'], unique=False)

    op.create_table(
        'team_members',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('role', sa.String(length=60), nullable=False),
        sa.Column('email', sa.String(length=255)),
        sa.Column('phone', sa.String(length=40)),
        _money('standard_fee'),
        sa.Column('no_rek', sa.String(length=100)),
        _money('reward_balance'),
        sa.Column('rating', sa.Float()),
        sa.Column('performance_notes', sa.JSON()),
        sa.Column('portal_access_id', sa.String(length=120)),
        sa.UniqueConstraint('portal_access_id', name='uq_team_members_portal_access_id'),
    )
    op.create_index('ix_team_members_portal_access_id', 'team_members', ['portal_access_id'], unique=False)

    op.create_table(
        'transactions',
        _id(),
        sa.Column('date', sa.Date()),
        sa.Column('description', sa.String(length=300), nullable=False),
        _money('amount', nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('project_id', sa.String(length=36)),
        sa.Column('category', sa.String(length=100)),
        sa.Column('method', sa.String(length=40)),
        sa.Column('pocket_id', sa.String(length=36)),
        sa.Column('card_id', sa.String(length=36)),
        sa.Column('vendor_signature', sa.Text()),
    )
    op.create_index('ix_transactions_project_id', 'transactions', ['project_id'], unique=False)

    op.create_table(
        'packages',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        _money('price', nullable=False),
        sa.Column('physical_items', sa.JSON()),
        sa.Column('digital_items', sa.JSON()),
        sa.Column('processing_time', sa.String(length=100)),
        _money('default_printing_cost'),
        _money('default_transport_cost'),
        sa.Column('photographers', sa.String(length=100)),
        sa.Column('videographers', sa.String(length=100)),
    )

    op.create_table(
        'add_ons',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        _money('price', nullable=False),
    )

    op.create_table(
        'financial_pockets',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('icon', sa.String(length=40)),
        sa.Column('type', sa.String(length=60)),
        _money('amount'),
        _money('goal_amount'),
        sa.Column('lock_end_date', sa.Date()),
        sa.Column('source_card_id', sa.String(length=36)),
    )

    op.create_table(
        'team_project_payments',
        _id(),
        sa.Column('project_id', sa.String(length=36)),
        sa.Column('team_member_id', sa.String(length=36)),
        sa.Column('team_member_name', sa.String(length=200)),
        sa.Column('date', sa.Date()),
        sa.Column('status', sa.String(length=20)),
        _money('fee'),
        _money('reward'),
    )
    op.create_index('ix_team_project_payments_project_id', 'team_project_payments', ['project_id'], unique=False)
    op.create_index('ix_team_project_payments_team_member_id', 'team_project_payments', ['team_member_id'], unique=False)

    op.create_table(
        'team_payment_records',
        _id(),
        sa.Column('record_number', sa.String(length=60)),
        sa.Column('team_member_id', sa.String(length=36)),
        sa.Column('date', sa.Date()),
        sa.Column('project_payment_ids', sa.JSON()),
        _money('total_amount'),
        sa.Column('vendor_signature', sa.Text()),
    )
    op.create_index('ix_team_payment_records_team_member_id', 'team_payment_records', ['team_member_id'], unique=False)

    op.create_table(
        'leads',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('contact_channel', sa.String(length=60)),
        sa.Column('location', sa.String(length=255)),
        sa.Column('status', sa.String(length=60)),
        sa.Column('date', sa.Date()),
        sa.Column('notes', sa.Text()),
        sa.Column('whatsapp', sa.String(length=40)),
    )

    op.create_table(
        'reward_ledger_entries',
        _id(),
        sa.Column('team_member_id', sa.String(length=36)),
        sa.Column('date', sa.Date()),
        sa.Column('description', sa.String(length=300)),
        _money('amount'),
        sa.Column('project_id', sa.String(length=36)),
    )
    op.create_index('ix_reward_ledger_entries_team_member_id', 'reward_ledger_entries', ['team_member_id'], unique=False)

    op.create_table(
        'cards',
        _id(),
        sa.Column('card_holder_name', sa.String(length=200)),
        sa.Column('bank_name', sa.String(length=100), nullable=False),
        sa.Column('card_type', sa.String(length=40)),
        sa.Column('last_four_digits', sa.String(length=4)),
        sa.Column('expiry_date', sa.String(length=7)),
        _money('balance'),
        sa.Column('color_gradient', sa.String(length=120)),
    )

    op.create_table(
        'assets',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('purchase_date', sa.Date()),
        _money('purchase_price', nullable=False),
        sa.Column('serial_number', sa.String(length=120)),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text()),
    )

    op.create_table(
        'client_feedback',
        _id(),
        sa.Column('client_name', sa.String(length=200), nullable=False),
        sa.Column('satisfaction', sa.String(length=40)),
        sa.Column('rating', sa.Integer()),
        sa.Column('feedback', sa.Text()),
        sa.Column('date', sa.Date()),
    )

    op.create_table(
        'contracts',
        _id(),
        sa.Column('contract_number', sa.String(length=60)),
        sa.Column('client_id', sa.String(length=36)),
        sa.Column('project_id', sa.String(length=36)),
        sa.Column('signing_date', sa.Date()),
        sa.Column('signing_location', sa.String(length=200)),
        sa.Column('client_name1', sa.String(length=200)),
        sa.Column('client_address1', sa.Text()),
        sa.Column('client_phone1', sa.String(length=40)),
        sa.Column('scope_of_work', sa.Text()),
        _money('total_cost'),
        sa.Column('jurisdiction', sa.String(length=200)),
        sa.Column('vendor_signature', sa.Text()),
        sa.Column('client_signature', sa.Text()),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_contracts_contract_number', 'contracts', ['contract_number'], unique=False)
    op.create_index('ix_contracts_client_id', 'contracts', ['client_id'], unique=False)
    op.create_index('ix_contracts_project_id', 'contracts', ['project_id'], unique=False)

    op.create_table(
        'notifications',
        _id(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime()),
        sa.Column('is_read', sa.Boolean()),
        sa.Column('icon', sa.String(length=40)),
        sa.Column('link_view', sa.String(length=60)),
        sa.Column('link_action', sa.JSON()),
    )

    op.create_table(
        'social_media_posts',
        _id(),
        sa.Column('project_id', sa.String(length=36)),
        sa.Column('client_name', sa.String(length=200)),
        sa.Column('post_type', sa.String(length=60)),
        sa.Column('platform', sa.String(length=60)),
        sa.Column('scheduled_date', sa.Date()),
        sa.Column('caption', sa.Text()),
        sa.Column('media_url', sa.String(length=600)),
        sa.Column('status', sa.String(length=40)),
        sa.Column('notes', sa.Text()),
    )

    op.create_table(
        'promo_codes',
        _id(),
        sa.Column('code', sa.String(length=60), nullable=False),
        sa.Column('description', sa.String(length=300)),
        sa.Column('discount_type', sa.String(length=20), nullable=False),
        _money('discount_value', nullable=False),
        _money('min_order_amount'),
        sa.Column('max_usage', sa.Integer()),
        sa.Column('usage_count', sa.Integer()),
        sa.Column('valid_from', sa.Date()),
        sa.Column('valid_until', sa.Date()),
        sa.Column('is_active', sa.Boolean()),
        sa.Column('created_at', sa.DateTime()),
        sa.UniqueConstraint('code', name='uq_promo_codes_code'),
    )
    op.create_index('ix_promo_codes_code', 'promo_codes', ['code'], unique=False)

    op.create_table(
        'sops',
        _id(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('last_updated', sa.DateTime()),
    )

    op.create_table(
        'calendar_events',
        _id(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(length=5)),
        sa.Column('end_time', sa.String(length=5)),
        sa.Column('event_type', sa.String(length=60)),
        sa.Column('notes', sa.Text()),
    )


def downgrade():
    for table in (
        'calendar_events',
        'sops',
        'promo_codes',
        'social_media_posts',
        'notifications',
        'contracts',
        'client_feedback',
        'assets',
        'cards',
        'reward_ledger_entries',
        'leads',
        'team_payment_records',
        'team_project_payments',
        'financial_pockets',
        'add_ons',
        'packages',
        'transactions',
        'team_members',
        'projects',
        'clients',
        'profiles',
        'users',
    ):
        op.drop_table(table)
