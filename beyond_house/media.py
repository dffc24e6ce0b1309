"""Image uploads into the local media bucket."""
import os
import secrets
import time

from flask import current_app
from PIL import Image, UnidentifiedImageError
from werkzeug.utils import secure_filename

FOLDER_CHARS = set('abcdefghijklmnopqrstuvwxyz0123456789-_')
DEFAULT_FOLDER = 'portfolio'


class UploadRejected(Exception):
    """An upload failed validation; the message is safe to show to the admin."""


def _file_size(file):
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def normalize_folder(folder):
    candidate = (folder or '').strip().lower()
    if not candidate or not set(candidate) <= FOLDER_CHARS:
        return DEFAULT_FOLDER
    return candidate[:40]


def media_root():
    return os.path.join(current_app.config['UPLOAD_FOLDER'], current_app.config.get('MEDIA_BUCKET', 'media'))


def validate_image_upload(file, max_bytes=None):
    """Return an error message for an unacceptable upload, or None."""
    if not file or not file.filename:
        return 'Please choose an image to upload.'
    mime_type = (file.mimetype or '').split(';', 1)[0].lower()
    if not mime_type.startswith('image/'):
        return 'Invalid file type. Please upload an image file.'
    if max_bytes is None:
        max_bytes = current_app.config.get('MEDIA_MAX_UPLOAD_BYTES', 5 * 1024 * 1024)
    if _file_size(file) > max_bytes:
        return f'File too large. Please upload an image smaller than {max_bytes // (1024 * 1024)}MB.'

    max_pixels = max(1, int(current_app.config.get('MAX_UPLOAD_IMAGE_PIXELS', 40_000_000)))
    try:
        with Image.open(file.stream) as image:
            width, height = image.size
            if width < 1 or height < 1 or (width * height) > max_pixels:
                return 'Image dimensions are not supported.'
            image.verify()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError):
        return 'The uploaded file is not a readable image.'
    finally:
        file.stream.seek(0)
    return None


def build_object_name(original_filename, now_ms=None):
    """``<epoch_ms>-<random>.<ext>`` so concurrent uploads never overwrite each other."""
    filename = secure_filename(original_filename or '')
    extension = filename.rsplit('.', 1)[1].lower() if '.' in filename else 'bin'
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{timestamp}-{secrets.token_hex(4)}.{extension[:10]}"


def store_image(file, folder=DEFAULT_FOLDER):
    """Validate and store an uploaded image, returning its public URL.

    Raises UploadRejected with a user-facing message when validation fails;
    nothing is written in that case.
    """
    error = validate_image_upload(file)
    if error:
        raise UploadRejected(error)

    folder = normalize_folder(folder)
    target_dir = os.path.join(media_root(), folder)
    os.makedirs(target_dir, exist_ok=True)
    object_name = build_object_name(file.filename)
    file.save(os.path.join(target_dir, object_name))
    current_app.logger.info('Stored media object %s/%s.', folder, object_name)
    return public_url(f'{folder}/{object_name}')


def public_url(object_path):
    return f"/media/{object_path}"


def resolve_media_path(object_path):
    """Map a public object path back to a file under the bucket, or None."""
    parts = [part for part in (object_path or '').split('/') if part]
    if len(parts) != 2:
        return None
    folder, name = parts
    if normalize_folder(folder) != folder or secure_filename(name) != name:
        return None
    root = os.path.abspath(media_root())
    full_path = os.path.abspath(os.path.join(root, folder, name))
    try:
        if os.path.commonpath([root, full_path]) != root:
            return None
    except ValueError:
        return None
    return full_path
