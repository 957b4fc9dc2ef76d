"""
WTForms Form Classes for the StudioDesk Application

Every form here is bound from a JSON body or a regular form post (see
``studiodesk.routes.helpers.bind_form``). Validation is limited to required
fields, ranges and type coercion.
"""

from flask_ckeditor import CKEditorField
from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    DateField,
    DecimalField,
    FieldList,
    FloatField,
    Form,
    FormField,
    IntegerField,
    PasswordField,
    SelectField,
    StringField,
    TextAreaField,
)
from wtforms.validators import DataRequired, Email, InputRequired, Length, NumberRange, Optional, URL, ValidationError

from studiodesk.domain.enums import (
    AssetStatus,
    ConfirmationStage,
    DiscountType,
    FREELANCER_ROLES,
    RevisionStatus,
    Signer,
)


REQUIRED = 'Wajib diisi'


class LoginForm(FlaskForm):
    """Dashboard login"""

    email = StringField('Email', validators=[
        DataRequired(message='Email wajib diisi'),
        Length(max=255),
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password wajib diisi'),
    ])
    remember_me = BooleanField('Ingat saya', default=False)


class AssetForm(FlaskForm):
    name = StringField('Nama Aset', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    category = StringField('Kategori', validators=[DataRequired(message=REQUIRED), Length(max=100)])
    purchase_date = DateField('Tanggal Beli', validators=[Optional()])
    purchase_price = DecimalField('Harga Beli', validators=[
        InputRequired(message=REQUIRED),
        NumberRange(min=0, message='Harga tidak boleh negatif'),
    ])
    serial_number = StringField('Nomor Seri', validators=[Optional(), Length(max=120)])
    status = SelectField(
        'Status',
        choices=[(value, AssetStatus.LABELS[value]) for value in AssetStatus.ALL],
        default=AssetStatus.AVAILABLE,
    )
    notes = TextAreaField('Catatan', validators=[Optional()])


class FreelancerForm(FlaskForm):
    name = StringField('Nama', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    role = SelectField('Peran', choices=[(role, role) for role in FREELANCER_ROLES])
    email = StringField('Email', validators=[Optional(), Email(message='Email tidak valid'), Length(max=255)])
    phone = StringField('Telepon', validators=[Optional(), Length(max=40)])
    standard_fee = DecimalField('Fee Standar', validators=[Optional(), NumberRange(min=0)])
    no_rek = StringField('No. Rekening', validators=[Optional(), Length(max=100)])
    reward_balance = DecimalField('Saldo Hadiah', validators=[Optional(), NumberRange(min=0)])
    rating = FloatField('Rating', validators=[
        Optional(),
        NumberRange(min=0, max=5, message='Rating harus antara 0 dan 5'),
    ])


class PhysicalItemForm(Form):
    name = StringField('Nama Item', validators=[Optional()])
    price = DecimalField('Harga', validators=[Optional()])


class PackageForm(FlaskForm):
    name = StringField('Nama Paket', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    price = DecimalField('Harga', validators=[InputRequired(message=REQUIRED), NumberRange(min=0)])
    physical_items = FieldList(FormField(PhysicalItemForm))
    digital_items = FieldList(StringField('Item Digital'))
    processing_time = StringField('Waktu Pengerjaan', validators=[Optional(), Length(max=100)])
    default_printing_cost = DecimalField('Biaya Cetak', validators=[Optional(), NumberRange(min=0)])
    default_transport_cost = DecimalField('Biaya Transport', validators=[Optional(), NumberRange(min=0)])
    photographers = StringField('Fotografer', validators=[Optional(), Length(max=100)])
    videographers = StringField('Videografer', validators=[Optional(), Length(max=100)])


class PromoCodeForm(FlaskForm):
    code = StringField('Kode', validators=[DataRequired(message=REQUIRED), Length(max=60)])
    description = StringField('Deskripsi', validators=[Optional(), Length(max=300)])
    discount_type = SelectField(
        'Tipe Diskon',
        choices=[(DiscountType.PERCENTAGE, 'Persentase'), (DiscountType.FIXED, 'Nominal')],
        default=DiscountType.PERCENTAGE,
    )
    discount_value = DecimalField('Nilai Diskon', validators=[InputRequired(message=REQUIRED), NumberRange(min=0)])
    min_order_amount = DecimalField('Minimum Order', validators=[Optional(), NumberRange(min=0)])
    max_usage = IntegerField('Maks. Penggunaan', validators=[Optional(), NumberRange(min=0)])
    valid_from = DateField('Berlaku Dari', validators=[Optional()])
    valid_until = DateField('Berlaku Sampai', validators=[Optional()])
    is_active = BooleanField('Aktif', default=True)

    def validate_discount_value(self, field):
        if self.discount_type.data == DiscountType.PERCENTAGE and field.data is not None and field.data > 100:
            raise ValidationError('Persentase diskon maksimal 100')


class SOPForm(FlaskForm):
    title = StringField('Judul', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    category = StringField('Kategori', validators=[DataRequired(message=REQUIRED), Length(max=100)])
    content = CKEditorField('Konten', validators=[DataRequired(message=REQUIRED)])


class ProfileForm(FlaskForm):
    """Pengaturan: studio profile. Only the submitted keys are written."""

    full_name = StringField('Nama Lengkap', validators=[Optional(), Length(max=200)])
    email = StringField('Email', validators=[Optional(), Email(message='Email tidak valid')])
    phone = StringField('Telepon', validators=[Optional(), Length(max=40)])
    company_name = StringField('Nama Perusahaan', validators=[Optional(), Length(max=200)])
    website = StringField('Website', validators=[Optional(), Length(max=255)])
    address = TextAreaField('Alamat', validators=[Optional()])
    bank_account = StringField('Rekening', validators=[Optional(), Length(max=200)])
    authorized_signer = StringField('Penanda Tangan', validators=[Optional(), Length(max=200)])
    bio = TextAreaField('Bio', validators=[Optional()])
    briefing_template = TextAreaField('Template Briefing', validators=[Optional()])
    income_categories = FieldList(StringField())
    expense_categories = FieldList(StringField())
    project_types = FieldList(StringField())
    event_types = FieldList(StringField())
    asset_categories = FieldList(StringField())
    sop_categories = FieldList(StringField())


class PublicBookingForm(FlaskForm):
    client_name = StringField('Nama', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    email = StringField('Email', validators=[DataRequired(message=REQUIRED), Email(message='Email tidak valid')])
    phone = StringField('No. WhatsApp', validators=[DataRequired(message=REQUIRED), Length(max=40)])
    instagram = StringField('Instagram', validators=[Optional(), Length(max=100)])
    package_id = StringField('Paket', validators=[DataRequired(message='Pilih paket')])
    add_on_ids = FieldList(StringField())
    project_type = StringField('Jenis Acara', validators=[Optional(), Length(max=100)])
    location = StringField('Lokasi', validators=[Optional(), Length(max=255)])
    event_date = DateField('Tanggal Acara', validators=[Optional()])
    promo_code = StringField('Kode Promo', validators=[Optional(), Length(max=60)])
    transfer_amount = DecimalField('Jumlah Transfer', validators=[Optional(), NumberRange(min=0)])
    notes = TextAreaField('Catatan', validators=[Optional()])


class PublicLeadForm(FlaskForm):
    name = StringField('Nama', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    whatsapp = StringField('No. WhatsApp', validators=[DataRequired(message=REQUIRED), Length(max=40)])
    location = StringField('Lokasi', validators=[Optional(), Length(max=255)])
    event_date = DateField('Tanggal Acara', validators=[Optional()])
    notes = TextAreaField('Catatan', validators=[Optional()])


class SuggestionForm(FlaskForm):
    name = StringField('Nama', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    whatsapp = StringField('No. WhatsApp', validators=[Optional(), Length(max=40)])
    suggestion = TextAreaField('Saran', validators=[DataRequired(message=REQUIRED)])


class FeedbackForm(FlaskForm):
    client_name = StringField('Nama', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    rating = IntegerField('Rating', validators=[
        InputRequired(message=REQUIRED),
        NumberRange(min=1, max=5, message='Rating harus antara 1 dan 5'),
    ])
    satisfaction = StringField('Kepuasan', validators=[Optional(), Length(max=40)])
    feedback = TextAreaField('Masukan', validators=[Optional()])


class RevisionUpdateForm(FlaskForm):
    project_id = StringField('Proyek', validators=[DataRequired(message=REQUIRED)])
    revision_id = StringField('Revisi', validators=[DataRequired(message=REQUIRED)])
    freelancer_notes = TextAreaField('Catatan', validators=[Optional()])
    drive_link = StringField('Link Hasil', validators=[Optional(), URL(message='Link tidak valid')])
    status = SelectField('Status', choices=[(status, status) for status in RevisionStatus.ALL])


class StageConfirmationForm(FlaskForm):
    project_id = StringField('Proyek', validators=[DataRequired(message=REQUIRED)])
    stage = SelectField('Tahap', choices=[(stage, stage) for stage in ConfirmationStage.ALL])


class SubStatusConfirmationForm(FlaskForm):
    project_id = StringField('Proyek', validators=[DataRequired(message=REQUIRED)])
    sub_status = StringField('Sub-status', validators=[DataRequired(message=REQUIRED), Length(max=200)])
    note = TextAreaField('Catatan', validators=[Optional()])


class SignatureForm(FlaskForm):
    signature = TextAreaField('Tanda Tangan', validators=[DataRequired(message='Tanda tangan kosong')])
    signer = SelectField('Penanda Tangan', choices=[(signer, signer) for signer in Signer.ALL], default=Signer.VENDOR)
