"""Editable fields of the page-content managers.

Each field maps a form input to one page_content row. ``items`` fields are
JSON lists of objects edited as repeated rows with the given ``item_fields``.
"""
from .content_defaults import ABOUT_DEFAULTS, HOME_DEFAULTS

PAGE_CONTENT_SCHEMAS = {
    'home': {
        'label': 'Home Page',
        'defaults': HOME_DEFAULTS,
        'fields': [
            {'section': 'hero', 'key': 'heading', 'label': 'Hero Heading', 'type': 'text'},
            {'section': 'hero', 'key': 'tagline', 'label': 'Hero Tagline', 'type': 'text'},
            {'section': 'hero', 'key': 'cta_label', 'label': 'CTA Button Label', 'type': 'text'},
            {'section': 'hero', 'key': 'cta_link', 'label': 'CTA Button Link', 'type': 'text'},
            {
                'section': 'director',
                'key': 'content',
                'label': 'Director',
                'type': 'object',
                'item_fields': ['name', 'role', 'description1', 'description2'],
            },
            {
                'section': 'features',
                'key': 'items',
                'label': 'Features',
                'type': 'items',
                'item_fields': ['title', 'description'],
            },
            {'section': 'cta', 'key': 'heading', 'label': 'CTA Heading', 'type': 'text'},
            {'section': 'cta', 'key': 'text', 'label': 'CTA Text', 'type': 'textarea'},
        ],
    },
    'about': {
        'label': 'About Page',
        'defaults': ABOUT_DEFAULTS,
        'fields': [
            {'section': 'hero', 'key': 'heading', 'label': 'Hero Heading', 'type': 'text'},
            {'section': 'hero', 'key': 'description', 'label': 'Hero Description', 'type': 'textarea'},
            {'section': 'story', 'key': 'heading', 'label': 'Story Heading', 'type': 'text'},
            {'section': 'story', 'key': 'paragraph1', 'label': 'Story Paragraph 1', 'type': 'textarea'},
            {'section': 'story', 'key': 'paragraph2', 'label': 'Story Paragraph 2', 'type': 'textarea'},
            {'section': 'story', 'key': 'paragraph3', 'label': 'Story Paragraph 3', 'type': 'textarea'},
            {'section': 'mission', 'key': 'text', 'label': 'Mission', 'type': 'textarea'},
            {'section': 'vision', 'key': 'text', 'label': 'Vision', 'type': 'textarea'},
            {
                'section': 'values',
                'key': 'items',
                'label': 'Values',
                'type': 'items',
                'item_fields': ['title', 'description'],
            },
        ],
    },
}


def field_default(defaults, field):
    section_defaults = defaults.get(field['section'])
    if field['type'] == 'items':
        return section_defaults if isinstance(section_defaults, list) else []
    if field['type'] == 'object':
        return section_defaults if isinstance(section_defaults, dict) else {}
    if isinstance(section_defaults, dict):
        return section_defaults.get(field['key'], '')
    return ''


def field_input_name(field, item_field=None):
    name = f"{field['section']}__{field['key']}"
    if item_field:
        name = f'{name}__{item_field}'
    return name
