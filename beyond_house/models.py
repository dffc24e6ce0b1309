from datetime import datetime, timezone
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()

FORM_SOURCE_CONTACT = 'contact'
FORM_SOURCE_CONSULTATION = 'consultation'
FORM_SOURCE_QUOTE = 'quote'
FORM_SOURCES = (
    FORM_SOURCE_CONTACT,
    FORM_SOURCE_CONSULTATION,
    FORM_SOURCE_QUOTE,
)

SUBMISSION_STATUS_UNREAD = 'unread'
SUBMISSION_STATUS_READ = 'read'
SUBMISSION_STATUS_CONTACTED = 'contacted'
SUBMISSION_STATUSES = (
    SUBMISSION_STATUS_UNREAD,
    SUBMISSION_STATUS_READ,
    SUBMISSION_STATUS_CONTACTED,
)
SUBMISSION_STATUS_LABELS = {
    SUBMISSION_STATUS_UNREAD: 'Unread',
    SUBMISSION_STATUS_READ: 'Read',
    SUBMISSION_STATUS_CONTACTED: 'Contacted',
}

ROLE_ADMIN = 'admin'
ROLE_USER = 'user'
APP_ROLES = (ROLE_ADMIN, ROLE_USER)


def utc_now_naive():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_submission_status(value, default=SUBMISSION_STATUS_UNREAD):
    candidate = (value or '').strip().lower()
    if candidate in SUBMISSION_STATUSES:
        return candidate
    return default


def normalize_form_source(value, default=FORM_SOURCE_CONTACT):
    candidate = (value or '').strip().lower()
    if candidate in FORM_SOURCES:
        return candidate
    return default


def normalize_app_role(value, default=ROLE_USER):
    candidate = (value or '').strip().lower()
    if candidate in APP_ROLES:
        return candidate
    return default


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utc_now_naive, nullable=False)
    updated_at = db.Column(db.DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False)


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    roles = db.relationship('UserRole', backref='user', lazy=True, cascade='all, delete-orphan')
    profile = db.relationship('Profile', backref='user', uselist=False, lazy=True, cascade='all, delete-orphan')

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def display_name(self):
        if self.profile and self.profile.full_name:
            return self.profile.full_name
        return self.email


class UserRole(db.Model):
    __tablename__ = 'user_roles'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)
    created_at = db.Column(db.DateTime, default=utc_now_naive, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('user_id', 'role', name='uq_user_roles_user_role'),
    )


class Profile(TimestampMixin, db.Model):
    __tablename__ = 'profiles'

    # Shares the primary key of the auth account it describes.
    id = db.Column(db.Integer, db.ForeignKey('users.id'), primary_key=True)
    full_name = db.Column(db.String(100))
    email = db.Column(db.String(255))


class Service(TimestampMixin, db.Model):
    __tablename__ = 'services'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False)
    description = db.Column(db.Text)
    benefits = db.Column(db.JSON, default=list)
    image_url = db.Column(db.String(500))
    display_order = db.Column(db.Integer, nullable=False, default=0, index=True)
    is_visible = db.Column(db.Boolean, nullable=False, default=True, index=True)

    @property
    def benefit_list(self):
        return [str(item) for item in self.benefits] if isinstance(self.benefits, list) else []


class PortfolioItem(TimestampMixin, db.Model):
    __tablename__ = 'portfolio'

    id = db.Column(db.Integer, primary_key=True)
    image_url = db.Column(db.String(500), nullable=False)
    before_image_url = db.Column(db.String(500))
    category = db.Column(db.String(100))
    title = db.Column(db.String(200))
    hover_caption = db.Column(db.String(300))
    is_before_after = db.Column(db.Boolean, nullable=False, default=False)
    display_order = db.Column(db.Integer, nullable=False, default=0, index=True)
    is_visible = db.Column(db.Boolean, nullable=False, default=True, index=True)


class Testimonial(TimestampMixin, db.Model):
    __tablename__ = 'testimonials'

    id = db.Column(db.Integer, primary_key=True)
    client_name = db.Column(db.String(200), nullable=False)
    client_role = db.Column(db.String(200))
    content = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, default=5)
    display_order = db.Column(db.Integer, nullable=False, default=0, index=True)
    is_visible = db.Column(db.Boolean, nullable=False, default=True, index=True)


class PageContentItem(TimestampMixin, db.Model):
    __tablename__ = 'page_content'

    id = db.Column(db.Integer, primary_key=True)
    page = db.Column(db.String(50), nullable=False)
    section = db.Column(db.String(80), nullable=False)
    content_key = db.Column(db.String(80), nullable=False)
    content_value = db.Column(db.Text)
    content_json = db.Column(db.JSON)

    __table_args__ = (
        db.UniqueConstraint('page', 'section', 'content_key', name='uq_page_content_page_section_key'),
        db.Index('ix_page_content_page', 'page'),
    )


class SiteSettings(db.Model):
    __tablename__ = 'site_settings'

    id = db.Column(db.Integer, primary_key=True)
    company_name = db.Column(db.String(200), nullable=False, default='')
    location = db.Column(db.String(300), nullable=False, default='')
    phone = db.Column(db.String(80), nullable=False, default='')
    email = db.Column(db.String(200), nullable=False, default='')
    whatsapp = db.Column(db.String(80), nullable=False, default='')
    seo_title = db.Column(db.String(300))
    seo_description = db.Column(db.String(500))
    logo_url = db.Column(db.String(500))
    social_image_url = db.Column(db.String(500))
    updated_at = db.Column(db.DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False)


class FormSubmission(TimestampMixin, db.Model):
    __tablename__ = 'form_submissions'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(80))
    message = db.Column(db.Text)
    subject = db.Column(db.String(300))
    service_type = db.Column(db.String(80))
    preferred_date = db.Column(db.Date)
    form_source = db.Column(db.String(20), nullable=False, default=FORM_SOURCE_CONTACT, index=True)
    status = db.Column(db.String(20), nullable=False, default=SUBMISSION_STATUS_UNREAD, index=True)

    @property
    def status_label(self):
        return SUBMISSION_STATUS_LABELS.get(self.status, self.status)


class AuthRateLimitBucket(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    scope = db.Column(db.String(80), nullable=False, index=True)
    ip = db.Column(db.String(64), nullable=False, index=True)
    count = db.Column(db.Integer, nullable=False, default=0)
    reset_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, default=utc_now_naive, onupdate=utc_now_naive)

    __table_args__ = (
        db.UniqueConstraint('scope', 'ip', name='uq_auth_rate_limit_scope_ip'),
    )
