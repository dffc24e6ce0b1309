"""Page content lookups with hard-coded fallbacks.

Public pages never render blank: every accessor takes the default the page
would show if the database had no row, and database failures degrade to an
empty lookup instead of raising.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from .content_defaults import (
    DEFAULT_PORTFOLIO,
    DEFAULT_SERVICES,
    DEFAULT_SITE_SETTINGS,
    DEFAULT_TESTIMONIALS,
)
from .models import (
    db,
    PageContentItem,
    PortfolioItem,
    Service,
    SiteSettings,
    Testimonial,
)


class PageContent:
    """Rows of one page with section/key accessors."""

    def __init__(self, page, items=None, error=None):
        self.page = page
        self.items = list(items or [])
        self.error = error

    def _find(self, section, key):
        for item in self.items:
            if item.section == section and item.content_key == key:
                return item
        return None

    def get_value(self, section, key, default=''):
        item = self._find(section, key)
        if item is None or not item.content_value:
            return default
        return item.content_value

    def get_json(self, section, key, default=None):
        item = self._find(section, key)
        if item is None or item.content_json is None:
            return default
        return item.content_json

    def section(self, section, defaults):
        """Resolve every key of a flat defaults dict for one section."""
        return {key: self.get_value(section, key, value) for key, value in defaults.items()}


def load_page_content(page):
    try:
        items = PageContentItem.query.filter_by(page=page).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception('Failed to load page content for %s.', page)
        return PageContent(page, error=exc)
    return PageContent(page, items)


def save_page_content(page, values):
    """Upsert (section, key) -> value pairs for a page in one transaction.

    ``values`` is an iterable of ``(section, key, value)``; list and dict
    values go to content_json, everything else to content_value.
    """
    existing = {
        (item.section, item.content_key): item
        for item in PageContentItem.query.filter_by(page=page).all()
    }
    for section, key, value in values:
        item = existing.get((section, key))
        if item is None:
            item = PageContentItem(page=page, section=section, content_key=key)
            db.session.add(item)
            existing[(section, key)] = item
        if isinstance(value, (list, dict)):
            item.content_json = value
            item.content_value = None
        else:
            item.content_value = (value or '').strip() or None
            item.content_json = None
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise


def _visible_rows(model):
    """Visible rows in display order, or None when the page should show its defaults.

    Defaults only stand in for a failed query or a table that was never
    populated; a table whose rows are all hidden yields an empty list.
    """
    try:
        rows = model.query.filter_by(is_visible=True).order_by(model.display_order.asc(), model.id.asc()).all()
        if not rows and model.query.first() is None:
            return None
        return rows
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Failed to load visible %s rows.', model.__tablename__)
        return None


def visible_services():
    rows = _visible_rows(Service)
    if rows is None:
        return [dict(item) for item in DEFAULT_SERVICES]
    return [
        {
            'slug': row.slug,
            'title': row.title,
            'description': row.description or '',
            'benefits': row.benefit_list,
            'image_url': row.image_url or '',
        }
        for row in rows
    ]


def visible_portfolio():
    rows = _visible_rows(PortfolioItem)
    if rows is None:
        return [dict(item, before_image_url='', is_before_after=False) for item in DEFAULT_PORTFOLIO]
    return [
        {
            'image_url': row.image_url,
            'before_image_url': (row.before_image_url or '') if row.is_before_after else '',
            'is_before_after': bool(row.is_before_after),
            'title': row.title or '',
            'category': row.category or '',
            'hover_caption': row.hover_caption or '',
        }
        for row in rows
    ]


def portfolio_categories(items):
    categories = ['All']
    for item in items:
        category = item.get('category')
        if category and category not in categories:
            categories.append(category)
    return categories


def visible_testimonials():
    rows = _visible_rows(Testimonial)
    if rows is None:
        return [dict(item) for item in DEFAULT_TESTIMONIALS]
    return [
        {
            'client_name': row.client_name,
            'client_role': row.client_role or '',
            'content': row.content,
            'rating': row.rating or 5,
        }
        for row in rows
    ]


def get_site_settings():
    settings = dict(DEFAULT_SITE_SETTINGS)
    try:
        row = SiteSettings.query.order_by(SiteSettings.id.asc()).first()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Failed to load site settings.')
        return settings
    if row is None:
        return settings
    for key in settings:
        value = getattr(row, key, None)
        if value:
            settings[key] = value
    return settings
