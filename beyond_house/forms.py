"""Flask-WTF forms for the public site and the sign-in screen."""
from flask_wtf import FlaskForm
from wtforms import DateField, PasswordField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional, Regexp, ValidationError

from .content_defaults import SERVICE_TYPE_CHOICES
from .models import FORM_SOURCE_CONSULTATION, FORM_SOURCE_CONTACT, FORM_SOURCE_QUOTE
from .utils import EMAIL_RE


class _BaseForm(FlaskForm):
    class Meta:
        # The project already enforces CSRF globally in app.before_request.
        csrf = False

    def first_error(self):
        for field in self:
            if field.errors:
                return field.errors[0]
        return ''


_email_validators = [
    DataRequired(message='Email is required.'),
    Length(max=255),
    Regexp(EMAIL_RE, message='Invalid email address'),
]


class AuthForm(_BaseForm):
    email = StringField('Email', validators=_email_validators)
    password = PasswordField(
        'Password',
        validators=[
            DataRequired(message='Password must be at least 6 characters'),
            Length(min=6, max=100, message='Password must be at least 6 characters'),
        ],
    )
    full_name = StringField('Full Name', validators=[Optional(), Length(max=100)])


class SubmissionForm(_BaseForm):
    """One form, three sources; the source decides which optional fields matter."""

    full_name = StringField('Full Name', validators=[DataRequired(message='Full name is required.'), Length(max=200)])
    email = StringField('Email Address', validators=_email_validators)
    phone = StringField('Phone Number', validators=[DataRequired(message='Phone number is required.'), Length(max=80)])
    subject = StringField('Subject', validators=[Optional(), Length(max=300)])
    service_type = SelectField(
        'Service Type',
        choices=[('', 'Select a service')] + list(SERVICE_TYPE_CHOICES),
        default='',
    )
    preferred_date = DateField('Preferred Date', validators=[Optional()], format='%Y-%m-%d')
    message = TextAreaField('Message', validators=[Length(max=5000)])

    def __init__(self, *args, form_source=FORM_SOURCE_CONTACT, **kwargs):
        super().__init__(*args, **kwargs)
        self.form_source = form_source

    @property
    def requires_service(self):
        return self.form_source in {FORM_SOURCE_QUOTE, FORM_SOURCE_CONSULTATION}

    @property
    def shows_date(self):
        return self.form_source == FORM_SOURCE_CONSULTATION

    def validate_service_type(self, field):
        if self.requires_service and not field.data:
            raise ValidationError('Please select a service.')

    def validate_message(self, field):
        if not (field.data or '').strip():
            raise ValidationError('Message is required.')
