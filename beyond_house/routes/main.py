import os

from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app, abort, send_file
from sqlalchemy.exc import SQLAlchemyError

from ..content import (
    load_page_content,
    portfolio_categories,
    visible_portfolio,
    visible_services,
    visible_testimonials,
)
from ..content_defaults import ABOUT_DEFAULTS, CONSULTANCY_STEPS, HOME_DEFAULTS
from ..forms import SubmissionForm
from ..media import resolve_media_path
from ..models import (
    db,
    FormSubmission,
    FORM_SOURCE_CONSULTATION,
    FORM_SOURCE_CONTACT,
    FORM_SOURCE_QUOTE,
    SUBMISSION_STATUS_UNREAD,
    normalize_form_source,
)
from ..utils import clean_text

main_bp = Blueprint('main', __name__)

SUBMISSION_SUCCESS_MESSAGE = "Message Sent! Thank you for reaching out. We'll get back to you within 24 hours."


def save_submission(form):
    """Persist a validated public form as one unread submission row."""
    submission = FormSubmission(
        full_name=clean_text(form.full_name.data, 200),
        email=clean_text(form.email.data, 255).lower(),
        phone=clean_text(form.phone.data, 80) or None,
        subject=clean_text(form.subject.data, 300) or None,
        message=clean_text(form.message.data, 5000) or None,
        service_type=(form.service_type.data or None) if form.requires_service else None,
        preferred_date=form.preferred_date.data if form.shows_date else None,
        form_source=normalize_form_source(form.form_source),
        status=SUBMISSION_STATUS_UNREAD,
    )
    db.session.add(submission)
    db.session.commit()
    current_app.logger.info('Form submission saved (id=%s, source=%s).', submission.id, submission.form_source)
    return submission


def handle_submission(form, template, success_url, **context):
    if form.validate_on_submit():
        try:
            save_submission(form)
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception('Failed to save %s submission.', form.form_source)
            flash('We could not send your message. Please try again.', 'danger')
            return render_template(template, form=form, **context)
        flash(SUBMISSION_SUCCESS_MESSAGE, 'success')
        return redirect(success_url)
    if request.method == 'POST':
        flash(form.first_error() or 'Please check the form and try again.', 'danger')
    return render_template(template, form=form, **context)


@main_bp.route('/')
def index():
    content = load_page_content('home')
    hero = content.section('hero', HOME_DEFAULTS['hero'])
    cta = content.section('cta', HOME_DEFAULTS['cta'])
    director = content.get_json('director', 'content', HOME_DEFAULTS['director'])
    features = content.get_json('features', 'items', HOME_DEFAULTS['features'])
    return render_template(
        'index.html',
        hero=hero,
        cta=cta,
        director=director,
        features=features,
        services=visible_services(),
        testimonials=visible_testimonials(),
        portfolio=visible_portfolio()[:4],
    )


@main_bp.route('/about')
def about():
    content = load_page_content('about')
    return render_template(
        'about.html',
        hero=content.section('hero', ABOUT_DEFAULTS['hero']),
        story=content.section('story', ABOUT_DEFAULTS['story']),
        mission=content.get_value('mission', 'text', ABOUT_DEFAULTS['mission']['text']),
        vision=content.get_value('vision', 'text', ABOUT_DEFAULTS['vision']['text']),
        values=content.get_json('values', 'items', ABOUT_DEFAULTS['values']),
    )


@main_bp.route('/services')
def services():
    return render_template('services.html', services=visible_services())


@main_bp.route('/portfolio')
def portfolio():
    items = visible_portfolio()
    categories = portfolio_categories(items)
    active_category = clean_text(request.args.get('category', 'All'), 100) or 'All'
    if active_category not in categories:
        active_category = 'All'
    if active_category != 'All':
        items = [item for item in items if item['category'] == active_category]
    return render_template('portfolio.html', items=items, categories=categories, active_category=active_category)


@main_bp.route('/consultancy', methods=['GET', 'POST'])
def consultancy():
    form = SubmissionForm(form_source=FORM_SOURCE_CONSULTATION)
    return handle_submission(form, 'consultancy.html', url_for('main.consultancy'), steps=CONSULTANCY_STEPS)


@main_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    requested = (request.values.get('form') or '').strip().lower()
    source = FORM_SOURCE_QUOTE if requested == FORM_SOURCE_QUOTE else FORM_SOURCE_CONTACT
    form = SubmissionForm(form_source=source)
    success_url = url_for('main.contact', form=FORM_SOURCE_QUOTE) if source == FORM_SOURCE_QUOTE else url_for('main.contact')
    return handle_submission(form, 'contact.html', success_url)


@main_bp.route('/media/<path:object_path>')
def media_file(object_path):
    full_path = resolve_media_path(object_path)
    if not full_path or not os.path.isfile(full_path):
        abort(404)
    return send_file(full_path)
