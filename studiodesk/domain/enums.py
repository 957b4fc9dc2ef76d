from __future__ import annotations


class View:
    """Dashboard views a user can navigate to.

    Values double as the entries stored in ``User.permissions``.
    """

    DASHBOARD = 'Dashboard'
    PROSPEK = 'Prospek'
    CLIENTS = 'Klien'
    PROJECTS = 'Proyek'
    TEAM = 'Freelancer'
    FINANCE = 'Keuangan'
    CALENDAR = 'Kalender'
    CLIENT_REPORTS = 'Laporan Klien'
    PACKAGES = 'Input Package'
    ASSETS = 'Manajemen Aset'
    CONTRACTS = 'Kontrak Kerja'
    SOCIAL_MEDIA_PLANNER = 'Perencana Media Sosial'
    PROMO_CODES = 'Kode Promo'
    SOP = 'SOP'
    SETTINGS = 'Pengaturan'
    SQL_EDITOR = 'SQL Editor'

    ALL = (
        DASHBOARD,
        PROSPEK,
        CLIENTS,
        PROJECTS,
        TEAM,
        FINANCE,
        CALENDAR,
        CLIENT_REPORTS,
        PACKAGES,
        ASSETS,
        CONTRACTS,
        SOCIAL_MEDIA_PLANNER,
        PROMO_CODES,
        SOP,
        SETTINGS,
        SQL_EDITOR,
    )

    @classmethod
    def resolve(cls, value: str | None) -> str:
        """Return a known view for ``value``; anything else falls back to the dashboard."""
        candidate = (value or '').strip()
        for view in cls.ALL:
            if view.lower() == candidate.lower():
                return view
        return cls.DASHBOARD


class UserRole:
    ADMIN = 'Admin'
    MEMBER = 'Member'

    ALL = (ADMIN, MEMBER)


class AssetStatus:
    AVAILABLE = 'AVAILABLE'
    IN_USE = 'IN_USE'
    MAINTENANCE = 'MAINTENANCE'

    ALL = (AVAILABLE, IN_USE, MAINTENANCE)

    LABELS = {
        AVAILABLE: 'Tersedia',
        IN_USE: 'Digunakan',
        MAINTENANCE: 'Perbaikan',
    }


class DiscountType:
    PERCENTAGE = 'percentage'
    FIXED = 'fixed'

    ALL = (PERCENTAGE, FIXED)


class TransactionType:
    INCOME = 'Pemasukan'
    EXPENSE = 'Pengeluaran'

    ALL = (INCOME, EXPENSE)


class PaymentStatus:
    PAID = 'Lunas'
    DOWN_PAYMENT = 'DP Terbayar'
    UNPAID = 'Belum Bayar'

    ALL = (PAID, DOWN_PAYMENT, UNPAID)


class RevisionStatus:
    PENDING = 'Menunggu'
    IN_PROGRESS = 'Sedang Dikerjakan'
    COMPLETED = 'Selesai'

    ALL = (PENDING, IN_PROGRESS, COMPLETED)


class LeadStatus:
    DISCUSSION = 'Sedang Diskusi'
    FOLLOW_UP = 'Menunggu Follow Up'
    CONVERTED = 'Dikonversi'
    REJECTED = 'Ditolak'

    ALL = (DISCUSSION, FOLLOW_UP, CONVERTED, REJECTED)


class ConfirmationStage:
    EDITING = 'editing'
    PRINTING = 'printing'
    DELIVERY = 'delivery'

    ALL = (EDITING, PRINTING, DELIVERY)


class Signer:
    VENDOR = 'vendor'
    CLIENT = 'client'

    ALL = (VENDOR, CLIENT)


FREELANCER_ROLES = ('Fotografer', 'Videografer', 'Editor', 'Desainer', 'Koordinator')
