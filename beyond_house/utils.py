"""Shared utility functions used across route modules."""
import ipaddress
import re

from flask import request

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def clean_text(value, max_length=255):
    return (value or '').strip()[:max_length]


def is_valid_email(value):
    return bool(EMAIL_RE.match(value or ''))


def is_valid_url(value):
    """Accept blank values, absolute http(s) URLs and locally served media paths."""
    return not value or value.startswith(('https://', 'http://', '/media/', '/static/'))


def parse_int(value, default=0, min_value=None, max_value=None):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if min_value is not None and parsed < min_value:
        return min_value
    if max_value is not None and parsed > max_value:
        return max_value
    return parsed


def parse_benefits(text):
    """Split a newline separated text box into a list, dropping blank lines."""
    return [line.strip() for line in (text or '').split('\n') if line.strip()]


def format_benefits(benefits):
    if not isinstance(benefits, list):
        return ''
    return '\n'.join(str(item) for item in benefits)


def normalized_ip(value):
    candidate = (value or '').split(',', 1)[0].strip()
    if not candidate:
        return ''
    try:
        return str(ipaddress.ip_address(candidate))
    except ValueError:
        return ''


def get_request_ip():
    # request.remote_addr is proxy-aware when ProxyFix is enabled by app config.
    remote_ip = normalized_ip(request.remote_addr)
    return remote_ip or 'unknown'
