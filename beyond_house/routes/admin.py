import csv
import io
from datetime import date

from flask import Blueprint, Response, render_template, request, redirect, url_for, flash, current_app, jsonify
from slugify import slugify
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..auth import admin_required
from ..content import load_page_content, save_page_content
from ..content_schemas import PAGE_CONTENT_SCHEMAS, field_default, field_input_name
from ..media import UploadRejected, store_image
from ..models import (
    db,
    FormSubmission,
    PortfolioItem,
    Service,
    SiteSettings,
    Testimonial,
    FORM_SOURCE_CONSULTATION,
    FORM_SOURCE_QUOTE,
    SUBMISSION_STATUSES,
    SUBMISSION_STATUS_READ,
    SUBMISSION_STATUS_UNREAD,
    normalize_submission_status,
)
from ..ordering import persist_order, reorder_by_drop, reorder_by_ids
from ..utils import clean_text, format_benefits, is_valid_email, is_valid_url, parse_benefits, parse_int

admin_bp = Blueprint('admin', __name__)

SUBMISSION_FILTERS = ('all',) + SUBMISSION_STATUSES
CSV_HEADERS = ['Name', 'Email', 'Phone', 'Service', 'Subject', 'Message', 'Source', 'Status', 'Date']
SETTINGS_FIELDS = {
    'company_name': 200,
    'location': 300,
    'phone': 80,
    'email': 200,
    'whatsapp': 80,
    'seo_title': 300,
    'seo_description': 500,
    'logo_url': 500,
    'social_image_url': 500,
}
SETTINGS_IMAGE_FIELDS = ('logo_url', 'social_image_url')


class FormInvalid(Exception):
    """Raised by form readers; the message is flashed and the form re-rendered."""


def resolve_image_field(field, folder):
    """Return the URL for an image input pair: an uploaded ``<field>_file`` wins over the pasted URL."""
    upload = request.files.get(f'{field}_file')
    if upload and upload.filename:
        try:
            return store_image(upload, folder)
        except UploadRejected as exc:
            raise FormInvalid(str(exc))
    url = clean_text(request.form.get(field, ''), 500)
    if not is_valid_url(url):
        raise FormInvalid('Image URLs must start with http:// or https://.')
    return url


def _commit_or_flash(message):
    try:
        db.session.commit()
        return True
    except IntegrityError:
        db.session.rollback()
        current_app.logger.exception('Integrity error while saving admin changes.')
        flash(f'{message} A record with the same unique value already exists.', 'danger')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Database error while saving admin changes.')
        flash(message, 'danger')
    return False


def _json_error(message, status):
    response = jsonify({'error': message})
    response.status_code = status
    return response


def _ordered(model):
    return model.query.order_by(model.display_order.asc(), model.id.asc()).all()


def _reorder(model):
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    items = _ordered(model)
    try:
        if 'order' in payload:
            if not isinstance(payload['order'], list):
                raise ValueError('order must be a list')
            new_items = reorder_by_ids(items, [int(item_id) for item_id in payload['order']])
        else:
            source_id = int(payload.get('source_id'))
            target_id = int(payload.get('target_id'))
            if source_id == target_id:
                return jsonify({'status': 'ok', 'order': [item.id for item in items], 'changed': 0})
            known = {item.id for item in items}
            if source_id not in known or target_id not in known:
                return _json_error('Unknown item.', 404)
            new_items = reorder_by_drop(items, source_id, target_id)
    except (TypeError, ValueError):
        return _json_error('Invalid reorder request.', 400)

    try:
        changed = persist_order(new_items)
    except SQLAlchemyError:
        current_app.logger.exception('Failed to persist %s order.', model.__tablename__)
        return _json_error('Failed to save the new order.', 500)
    return jsonify({'status': 'ok', 'order': [item.id for item in new_items], 'changed': changed})


def _toggle_visibility(model, id, label, endpoint):
    item = db.get_or_404(model, id)
    item.is_visible = not item.is_visible
    if _commit_or_flash(f'Failed to update {label} visibility.'):
        flash(f"{label.capitalize()} {'visible' if item.is_visible else 'hidden'}.", 'success')
    return redirect(url_for(endpoint))


def _delete(model, id, label, endpoint):
    db.session.delete(db.get_or_404(model, id))
    if _commit_or_flash(f'Failed to delete {label}.'):
        flash(f'{label.capitalize()} deleted.', 'success')
    return redirect(url_for(endpoint))


# Dashboard
@admin_bp.route('/')
@admin_required
def dashboard():
    stats = {
        'total_submissions': FormSubmission.query.count(),
        'unread_submissions': FormSubmission.query.filter_by(status=SUBMISSION_STATUS_UNREAD).count(),
        'service_requests': FormSubmission.query.filter_by(form_source=FORM_SOURCE_QUOTE).count(),
        'consultation_bookings': FormSubmission.query.filter_by(form_source=FORM_SOURCE_CONSULTATION).count(),
        'portfolio_count': PortfolioItem.query.count(),
    }
    recent_submissions = FormSubmission.query.order_by(FormSubmission.created_at.desc()).limit(5).all()
    return render_template('admin/dashboard.html', stats=stats, recent_submissions=recent_submissions)


# Submissions
def _filtered_submissions(status_filter):
    query = FormSubmission.query.order_by(FormSubmission.created_at.desc(), FormSubmission.id.desc())
    if status_filter != 'all':
        query = query.filter_by(status=status_filter)
    return query.all()


def _submission_filter():
    status_filter = (request.args.get('status') or 'all').strip().lower()
    return status_filter if status_filter in SUBMISSION_FILTERS else 'all'


@admin_bp.route('/submissions')
@admin_required
def submissions():
    status_filter = _submission_filter()
    return render_template(
        'admin/submissions.html',
        items=_filtered_submissions(status_filter),
        status_filter=status_filter,
        filters=SUBMISSION_FILTERS,
    )


@admin_bp.route('/submissions/<int:id>')
@admin_required
def submission_view(id):
    item = db.get_or_404(FormSubmission, id)
    if item.status == SUBMISSION_STATUS_UNREAD:
        item.status = SUBMISSION_STATUS_READ
        _commit_or_flash('Failed to update status.')
    return render_template('admin/submission_view.html', item=item, statuses=SUBMISSION_STATUSES)


@admin_bp.route('/submissions/<int:id>/status', methods=['POST'])
@admin_required
def submission_status(id):
    item = db.get_or_404(FormSubmission, id)
    status = normalize_submission_status(request.form.get('status'), default='')
    if not status:
        flash('Unknown submission status.', 'danger')
    else:
        item.status = status
        if _commit_or_flash('Failed to update status.'):
            flash('Status updated.', 'success')
    return redirect(url_for('admin.submission_view', id=item.id))


@admin_bp.route('/submissions/<int:id>/delete', methods=['POST'])
@admin_required
def submission_delete(id):
    return _delete(FormSubmission, id, 'submission', 'admin.submissions')


def build_submissions_csv(items):
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for item in items:
        writer.writerow([
            item.full_name,
            item.email,
            item.phone or '',
            item.service_type or '',
            item.subject or '',
            item.message or '',
            item.form_source,
            item.status,
            item.created_at.date().isoformat() if item.created_at else '',
        ])
    return buffer.getvalue()


@admin_bp.route('/submissions/export.csv')
@admin_required
def submissions_export():
    status_filter = _submission_filter()
    body = build_submissions_csv(_filtered_submissions(status_filter))
    filename = f'submissions_{date.today().isoformat()}.csv'
    return Response(
        body,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


# Services
def read_service_form(item):
    title = clean_text(request.form.get('title'), 200)
    if not title:
        raise FormInvalid('Title is required.')
    item.title = title
    item.description = clean_text(request.form.get('description'), 10000)
    item.benefits = parse_benefits(request.form.get('benefits', ''))
    item.image_url = resolve_image_field('image_url', 'services') or None
    item.is_visible = 'is_visible' in request.form


def _service_draft(item=None):
    return {
        'id': item.id if item else None,
        'title': request.form.get('title', ''),
        'description': request.form.get('description', ''),
        'benefits_text': request.form.get('benefits', ''),
        'image_url': request.form.get('image_url', ''),
        'is_visible': 'is_visible' in request.form,
    }


@admin_bp.route('/services')
@admin_required
def services():
    return render_template('admin/services.html', items=_ordered(Service))


@admin_bp.route('/services/add', methods=['GET', 'POST'])
@admin_required
def service_add():
    if request.method == 'POST':
        item = Service(display_order=Service.query.count())
        try:
            read_service_form(item)
        except FormInvalid as exc:
            flash(str(exc), 'danger')
            return render_template('admin/service_form.html', item=_service_draft())
        item.slug = slugify(item.title)
        if not item.slug:
            flash('Unable to generate a valid slug from title.', 'danger')
            return render_template('admin/service_form.html', item=_service_draft())
        if Service.query.filter_by(slug=item.slug).first():
            flash('A service with that title already exists.', 'danger')
            return render_template('admin/service_form.html', item=_service_draft())
        db.session.add(item)
        if not _commit_or_flash('Failed to save service.'):
            return render_template('admin/service_form.html', item=_service_draft())
        flash('Service added.', 'success')
        return redirect(url_for('admin.services'))
    return render_template('admin/service_form.html', item=None)


@admin_bp.route('/services/<int:id>/edit', methods=['GET', 'POST'])
@admin_required
def service_edit(id):
    item = db.get_or_404(Service, id)
    if request.method == 'POST':
        try:
            read_service_form(item)
        except FormInvalid as exc:
            db.session.rollback()
            flash(str(exc), 'danger')
            return render_template('admin/service_form.html', item=_service_draft(item))
        if not _commit_or_flash('Failed to save service.'):
            return render_template('admin/service_form.html', item=_service_draft(item))
        flash('Service updated successfully.', 'success')
        return redirect(url_for('admin.services'))
    draft = {
        'id': item.id,
        'title': item.title,
        'description': item.description or '',
        'benefits_text': format_benefits(item.benefits),
        'image_url': item.image_url or '',
        'is_visible': item.is_visible,
    }
    return render_template('admin/service_form.html', item=draft)


@admin_bp.route('/services/<int:id>/toggle', methods=['POST'])
@admin_required
def service_toggle(id):
    return _toggle_visibility(Service, id, 'service', 'admin.services')


@admin_bp.route('/services/<int:id>/delete', methods=['POST'])
@admin_required
def service_delete(id):
    return _delete(Service, id, 'service', 'admin.services')


@admin_bp.route('/services/reorder', methods=['POST'])
@admin_required
def services_reorder():
    return _reorder(Service)


# Portfolio
def read_portfolio_form(item):
    item.image_url = resolve_image_field('image_url', 'portfolio')
    if not item.image_url:
        raise FormInvalid('Please upload an image or enter an image URL.')
    item.is_before_after = 'is_before_after' in request.form
    if item.is_before_after:
        item.before_image_url = resolve_image_field('before_image_url', 'portfolio')
        if not item.before_image_url:
            raise FormInvalid('Before/after items need a "before" image.')
    else:
        item.before_image_url = None
    item.title = clean_text(request.form.get('title'), 200) or None
    item.category = clean_text(request.form.get('category'), 100) or None
    item.hover_caption = clean_text(request.form.get('hover_caption'), 300) or None
    item.is_visible = 'is_visible' in request.form


def _portfolio_draft(item=None):
    return {
        'id': item.id if item else None,
        'image_url': request.form.get('image_url', ''),
        'before_image_url': request.form.get('before_image_url', ''),
        'is_before_after': 'is_before_after' in request.form,
        'title': request.form.get('title', ''),
        'category': request.form.get('category', ''),
        'hover_caption': request.form.get('hover_caption', ''),
        'is_visible': 'is_visible' in request.form,
    }


@admin_bp.route('/portfolio')
@admin_required
def portfolio():
    return render_template('admin/portfolio.html', items=_ordered(PortfolioItem))


@admin_bp.route('/portfolio/add', methods=['GET', 'POST'])
@admin_required
def portfolio_add():
    if request.method == 'POST':
        item = PortfolioItem(display_order=PortfolioItem.query.count())
        try:
            read_portfolio_form(item)
        except FormInvalid as exc:
            flash(str(exc), 'danger')
            return render_template('admin/portfolio_form.html', item=_portfolio_draft())
        db.session.add(item)
        if not _commit_or_flash('Failed to save portfolio item.'):
            return render_template('admin/portfolio_form.html', item=_portfolio_draft())
        flash('Portfolio item added.', 'success')
        return redirect(url_for('admin.portfolio'))
    return render_template('admin/portfolio_form.html', item=None)


@admin_bp.route('/portfolio/<int:id>/edit', methods=['GET', 'POST'])
@admin_required
def portfolio_edit(id):
    item = db.get_or_404(PortfolioItem, id)
    if request.method == 'POST':
        try:
            read_portfolio_form(item)
        except FormInvalid as exc:
            db.session.rollback()
            flash(str(exc), 'danger')
            return render_template('admin/portfolio_form.html', item=_portfolio_draft(item))
        if not _commit_or_flash('Failed to save portfolio item.'):
            return render_template('admin/portfolio_form.html', item=_portfolio_draft(item))
        flash('Portfolio item updated.', 'success')
        return redirect(url_for('admin.portfolio'))
    return render_template('admin/portfolio_form.html', item=item)


@admin_bp.route('/portfolio/<int:id>/toggle', methods=['POST'])
@admin_required
def portfolio_toggle(id):
    return _toggle_visibility(PortfolioItem, id, 'portfolio item', 'admin.portfolio')


@admin_bp.route('/portfolio/<int:id>/delete', methods=['POST'])
@admin_required
def portfolio_delete(id):
    return _delete(PortfolioItem, id, 'portfolio item', 'admin.portfolio')


@admin_bp.route('/portfolio/reorder', methods=['POST'])
@admin_required
def portfolio_reorder():
    return _reorder(PortfolioItem)


# Testimonials
def read_testimonial_form(item):
    client_name = clean_text(request.form.get('client_name'), 200)
    content = clean_text(request.form.get('content'), 4000)
    if not client_name or not content:
        raise FormInvalid('Client name and testimonial content are required.')
    item.client_name = client_name
    item.client_role = clean_text(request.form.get('client_role'), 200) or None
    item.content = content
    item.rating = parse_int(request.form.get('rating', 5), default=5, min_value=1, max_value=5)
    item.is_visible = 'is_visible' in request.form


def _testimonial_draft(item=None):
    return {
        'id': item.id if item else None,
        'client_name': request.form.get('client_name', ''),
        'client_role': request.form.get('client_role', ''),
        'content': request.form.get('content', ''),
        'rating': parse_int(request.form.get('rating', 5), default=5, min_value=1, max_value=5),
        'is_visible': 'is_visible' in request.form,
    }


@admin_bp.route('/testimonials')
@admin_required
def testimonials():
    return render_template('admin/testimonials.html', items=_ordered(Testimonial))


@admin_bp.route('/testimonials/add', methods=['GET', 'POST'])
@admin_required
def testimonial_add():
    if request.method == 'POST':
        item = Testimonial(display_order=Testimonial.query.count())
        try:
            read_testimonial_form(item)
        except FormInvalid as exc:
            flash(str(exc), 'danger')
            return render_template('admin/testimonial_form.html', item=_testimonial_draft())
        db.session.add(item)
        if not _commit_or_flash('Failed to save testimonial.'):
            return render_template('admin/testimonial_form.html', item=_testimonial_draft())
        flash('Testimonial added.', 'success')
        return redirect(url_for('admin.testimonials'))
    return render_template('admin/testimonial_form.html', item=None)


@admin_bp.route('/testimonials/<int:id>/edit', methods=['GET', 'POST'])
@admin_required
def testimonial_edit(id):
    item = db.get_or_404(Testimonial, id)
    if request.method == 'POST':
        try:
            read_testimonial_form(item)
        except FormInvalid as exc:
            db.session.rollback()
            flash(str(exc), 'danger')
            return render_template('admin/testimonial_form.html', item=_testimonial_draft(item))
        if not _commit_or_flash('Failed to save testimonial.'):
            return render_template('admin/testimonial_form.html', item=_testimonial_draft(item))
        flash('Testimonial updated.', 'success')
        return redirect(url_for('admin.testimonials'))
    return render_template('admin/testimonial_form.html', item=item)


@admin_bp.route('/testimonials/<int:id>/toggle', methods=['POST'])
@admin_required
def testimonial_toggle(id):
    return _toggle_visibility(Testimonial, id, 'testimonial', 'admin.testimonials')


@admin_bp.route('/testimonials/<int:id>/delete', methods=['POST'])
@admin_required
def testimonial_delete(id):
    return _delete(Testimonial, id, 'testimonial', 'admin.testimonials')


# Settings
@admin_bp.route('/settings', methods=['GET', 'POST'])
@admin_required
def settings():
    row = SiteSettings.query.order_by(SiteSettings.id.asc()).first()
    if request.method == 'POST':
        values = {key: clean_text(request.form.get(key, ''), limit) for key, limit in SETTINGS_FIELDS.items()}
        try:
            for key in SETTINGS_IMAGE_FIELDS:
                values[key] = resolve_image_field(key, 'branding')
            if values['email'] and not is_valid_email(values['email']):
                raise FormInvalid('Please provide a valid email address.')
        except FormInvalid as exc:
            flash(str(exc), 'danger')
            return render_template('admin/settings.html', settings=values)
        if row is None:
            row = SiteSettings()
            db.session.add(row)
        for key, value in values.items():
            if key in ('seo_title', 'seo_description') or key in SETTINGS_IMAGE_FIELDS:
                value = value or None
            setattr(row, key, value)
        if not _commit_or_flash('Failed to save settings.'):
            return render_template('admin/settings.html', settings=values)
        flash('Settings saved successfully.', 'success')
        return redirect(url_for('admin.settings'))
    current = {key: (getattr(row, key, '') or '') if row else '' for key in SETTINGS_FIELDS}
    return render_template('admin/settings.html', settings=current)


# Page content
def read_page_content_form(schema):
    values = []
    for field in schema['fields']:
        if field['type'] == 'items':
            columns = {name: request.form.getlist(field_input_name(field, name)) for name in field['item_fields']}
            rows = []
            for index in range(max((len(column) for column in columns.values()), default=0)):
                row = {
                    name: clean_text(column[index] if index < len(column) else '', 2000)
                    for name, column in columns.items()
                }
                if any(row.values()):
                    rows.append(row)
            values.append((field['section'], field['key'], rows))
        elif field['type'] == 'object':
            obj = {
                name: clean_text(request.form.get(field_input_name(field, name), ''), 4000)
                for name in field['item_fields']
            }
            values.append((field['section'], field['key'], obj if any(obj.values()) else None))
        else:
            limit = 4000 if field['type'] == 'textarea' else 300
            values.append((field['section'], field['key'], clean_text(request.form.get(field_input_name(field)), limit)))
    return values


def _page_manager(page, endpoint):
    schema = PAGE_CONTENT_SCHEMAS[page]
    if request.method == 'POST':
        try:
            save_page_content(page, read_page_content_form(schema))
        except SQLAlchemyError:
            current_app.logger.exception('Failed to save %s page content.', page)
            flash('Failed to save page content.', 'danger')
        else:
            flash(f"{schema['label']} content saved!", 'success')
        return redirect(url_for(endpoint))

    content = load_page_content(page)
    current = {}
    for field in schema['fields']:
        default = field_default(schema['defaults'], field)
        if field['type'] in ('items', 'object'):
            current[field_input_name(field)] = content.get_json(field['section'], field['key'], default)
        else:
            current[field_input_name(field)] = content.get_value(field['section'], field['key'], default)
    return render_template(
        'admin/page_content.html',
        schema=schema,
        current=current,
        field_input_name=field_input_name,
        action=url_for(endpoint),
    )


@admin_bp.route('/home-page', methods=['GET', 'POST'])
@admin_required
def home_page():
    return _page_manager('home', 'admin.home_page')


@admin_bp.route('/about-page', methods=['GET', 'POST'])
@admin_required
def about_page():
    return _page_manager('about', 'admin.about_page')


# Media
@admin_bp.route('/upload', methods=['POST'])
@admin_required
def upload():
    try:
        url = store_image(request.files.get('file'), request.form.get('folder'))
    except UploadRejected as exc:
        return _json_error(str(exc), 400)
    except OSError:
        current_app.logger.exception('Media upload failed.')
        return _json_error('Failed to upload image. Please try again.', 500)
    return jsonify({'url': url})
