"""Stateless proxy between the site chat widget and the completion API."""
import json
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from flask import Blueprint, Response, current_app, jsonify, request

chat_bp = Blueprint('chat', __name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
}
ALLOWED_MESSAGE_ROLES = {'user', 'assistant'}

SYSTEM_PROMPT = """You are Beyond House Assistant, a friendly and knowledgeable AI assistant for Beyond House Interior Construction & Consultancy, located in Nairobi, Kenya.

## About the Company
Beyond House Interior Construction & Consultancy is a premier interior construction company founded and directed by Dancan Odhiambo. We specialize in transforming spaces with high-quality craftsmanship and innovative designs. We have completed over 100 successful projects across Kenya.

## Our Services
1. **Ceiling Design**: Stunning ceiling designs featuring LED lighting, gypsum work, and modern architectural elements. We create coffered ceilings, suspended ceilings, and custom designs.
2. **Cabinetry**: Custom-built wardrobes, kitchen cabinets, vanity units, and storage solutions designed to maximize space and style. We use premium materials and finishes.
3. **Walls & Décor**: Beautiful wall treatments including wood paneling, textures, accent walls, decorative finishes, TV unit installations, and wall murals.
4. **Floors & Tiles**: Premium flooring solutions from elegant tiles to wooden floors, parquet, vinyl flooring, and natural stone finishes.

## Contact Information
- Phone: 0791 996 448
- Email: Beyondhouseint@gmail.com
- WhatsApp: +254791996448
- Location: Nairobi, Kenya

## Key Strengths
- Quality Craftsmanship with premium materials
- Professional team of designers and skilled craftsmen
- Creative Solutions tailored to unique visions
- Timely Delivery without compromising quality
- Over 100 successful projects completed

## How to Help Users
1. Answer questions about our services, pricing inquiries, and project consultations
2. Help users understand which service fits their needs
3. Provide information about the consultation and quote process
4. Direct users to book consultations at /consultancy or request quotes at /contact
5. Share details about our portfolio and past projects
6. Explain our design process and timeline expectations

Always be helpful, professional, and warm. If you don't know specific pricing (as it varies by project), encourage users to book a free consultation or request a quote. Recommend visiting specific pages when relevant:
- /services for detailed service information
- /portfolio for project examples
- /consultancy to book a consultation
- /contact to request a quote or get in touch
- /about to learn more about the company"""

UPSTREAM_ERRORS = {
    429: 'Rate limit exceeded. Please try again in a moment.',
    402: 'Service temporarily unavailable.',
}


def _json_error(message, status):
    response = jsonify({'error': message})
    response.status_code = status
    return response


def parse_messages(payload):
    """Validate the caller's history; raises ValueError on malformed input."""
    if not isinstance(payload, dict) or not isinstance(payload.get('messages'), list):
        raise ValueError('Request body must be a JSON object with a "messages" list.')
    messages = []
    for entry in payload['messages']:
        if not isinstance(entry, dict):
            raise ValueError('Each message must be an object with "role" and "content".')
        role = str(entry.get('role') or '').strip().lower()
        content = entry.get('content')
        if role not in ALLOWED_MESSAGE_ROLES or not isinstance(content, str):
            raise ValueError('Each message must be an object with "role" and "content".')
        messages.append({'role': role, 'content': content})
    return messages


def build_upstream_request(messages):
    body = {
        'model': current_app.config.get('CHAT_MODEL'),
        'messages': [{'role': 'system', 'content': SYSTEM_PROMPT}, *messages],
        'stream': True,
    }
    return Request(
        current_app.config['CHAT_API_URL'],
        data=json.dumps(body).encode('utf-8'),
        headers={
            'Authorization': f"Bearer {current_app.config['CHAT_API_KEY']}",
            'Content-Type': 'application/json',
        },
        method='POST',
    )


def _relay(upstream):
    try:
        for chunk in upstream:
            yield chunk
    finally:
        upstream.close()


@chat_bp.after_request
def add_cors_headers(response):
    for key, value in CORS_HEADERS.items():
        response.headers[key] = value
    response.headers['Cross-Origin-Resource-Policy'] = 'cross-origin'
    return response


@chat_bp.route('/chat', methods=['POST', 'OPTIONS'])
def chat():
    if request.method == 'OPTIONS':
        return Response(status=200)

    if not current_app.config.get('CHAT_API_KEY'):
        current_app.logger.error('Chat request rejected: CHAT_API_KEY is not configured.')
        return _json_error('CHAT_API_KEY is not configured', 500)

    try:
        messages = parse_messages(request.get_json(silent=True))
    except ValueError as exc:
        return _json_error(str(exc), 400)

    timeout = current_app.config.get('CHAT_TIMEOUT_SECONDS', 60.0)
    try:
        upstream = urlopen(build_upstream_request(messages), timeout=timeout)  # nosec B310
    except HTTPError as exc:
        with exc:
            error_body = exc.read().decode('utf-8', errors='replace')
        if exc.code in UPSTREAM_ERRORS:
            current_app.logger.warning('AI gateway returned %s.', exc.code)
            return _json_error(UPSTREAM_ERRORS[exc.code], exc.code)
        current_app.logger.error('AI gateway error %s: %s', exc.code, error_body[:500])
        return _json_error('AI service error', 500)
    except Exception as exc:
        current_app.logger.exception('Chat proxy request failed.')
        return _json_error(str(exc) or 'Unknown error', 500)

    return Response(_relay(upstream), mimetype='text/event-stream')
