from flask import current_app
from slugify import slugify

from .auth import ensure_admin_account
from .content_defaults import DEFAULT_PORTFOLIO, DEFAULT_SERVICES, DEFAULT_SITE_SETTINGS, DEFAULT_TESTIMONIALS
from .models import db, PortfolioItem, Service, SiteSettings, Testimonial


def seed_site_settings():
    if SiteSettings.query.first():
        return
    db.session.add(SiteSettings(**{key: value or None for key, value in DEFAULT_SITE_SETTINGS.items()}))


def seed_services():
    if Service.query.first():
        return
    for i, service in enumerate(DEFAULT_SERVICES):
        db.session.add(Service(
            title=service['title'],
            slug=service.get('slug') or slugify(service['title']),
            description=service['description'],
            benefits=list(service['benefits']),
            image_url=service.get('image_url') or None,
            display_order=i,
            is_visible=True,
        ))


def seed_portfolio():
    if PortfolioItem.query.first():
        return
    for i, item in enumerate(DEFAULT_PORTFOLIO):
        db.session.add(PortfolioItem(
            image_url=item['image_url'],
            title=item.get('title') or None,
            category=item.get('category') or None,
            hover_caption=item.get('hover_caption') or None,
            is_before_after=False,
            display_order=i,
            is_visible=True,
        ))


def seed_testimonials():
    if Testimonial.query.first():
        return
    for i, item in enumerate(DEFAULT_TESTIMONIALS):
        db.session.add(Testimonial(
            client_name=item['client_name'],
            client_role=item.get('client_role') or None,
            content=item['content'],
            rating=item.get('rating', 5),
            display_order=i,
            is_visible=True,
        ))


def seed_database():
    seed_site_settings()
    seed_services()
    seed_portfolio()
    seed_testimonials()
    db.session.commit()

    # Always sync the bootstrap admin with the environment on startup.
    if ensure_admin_account() is None:
        current_app.logger.warning(
            'ADMIN_PASSWORD not set; no bootstrap admin was created. '
            'Set ADMIN_EMAIL and ADMIN_PASSWORD and restart to create one.'
        )
