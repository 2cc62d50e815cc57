"""Validation of scanned page images sent as multipart uploads.

Scans arrive as `imageFile` (pages and page groups) or `image` (OCR).
The extension is checked against a whitelist and the magic bytes must agree
with it; the client's content type is never trusted.
"""

from collections import namedtuple

from flask import request, jsonify

IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'tif', 'tiff', 'bmp'}

PAGE_IMAGE_MAX_SIZE = 16 * 1024 * 1024  # 16MB, same as MAX_CONTENT_LENGTH

# Maps magic byte signatures to (extension_set, mime_type)
IMAGE_SIGNATURES = [
    (b'\x89PNG\r\n\x1a\n', {'png'}, 'image/png'),
    (b'\xff\xd8\xff', {'jpg', 'jpeg'}, 'image/jpeg'),
    (b'GIF87a', {'gif'}, 'image/gif'),
    (b'GIF89a', {'gif'}, 'image/gif'),
    (b'RIFF', {'webp'}, 'image/webp'),  # WebP starts with RIFF....WEBP
    (b'II*\x00', {'tif', 'tiff'}, 'image/tiff'),
    (b'MM\x00*', {'tif', 'tiff'}, 'image/tiff'),
    (b'BM', {'bmp'}, 'image/bmp'),
]

UploadedImage = namedtuple('UploadedImage', ['data', 'filename', 'content_type'])


def detect_image_type(file_data: bytes):
    """Detect image type from magic bytes.

    Returns:
        Tuple of (extension_set, mime_type) or (None, None) if unknown.
    """
    if len(file_data) < 12:
        return None, None

    for signature, exts, mime in IMAGE_SIGNATURES:
        if file_data[:len(signature)] == signature:
            if 'webp' in exts and file_data[8:12] != b'WEBP':
                continue
            return exts, mime

    return None, None


def allowed_image(filename):
    """Check if file has an allowed image extension."""
    return '.' in filename and \
           filename.rsplit('.', 1)[1].lower() in IMAGE_EXTENSIONS


def get_image_from_request(field: str, max_size: int = PAGE_IMAGE_MAX_SIZE, required: bool = True):
    """Extract and validate an image from the multipart form field `field`.

    Returns:
        Tuple of (UploadedImage or None, error_response or None). A missing
        optional field gives (None, None).
    """
    file = request.files.get(field)

    if file is None or file.filename == '':
        if not required:
            return None, None
        return None, (jsonify({'error': f'No {field} provided'}), 400)

    if not allowed_image(file.filename):
        allowed_types = ', '.join(sorted(IMAGE_EXTENSIONS))
        return None, (jsonify({
            'error': f'File type not allowed. Allowed: {allowed_types}'
        }), 400)

    file_data = file.read()

    if len(file_data) > max_size:
        max_mb = max_size // (1024 * 1024)
        return None, (jsonify({
            'error': f'File too large. Maximum size: {max_mb}MB'
        }), 400)

    detected_exts, detected_mime = detect_image_type(file_data)

    if detected_exts is None:
        return None, (jsonify({
            'error': 'File does not appear to be a valid image'
        }), 400)

    file_ext = file.filename.rsplit('.', 1)[1].lower()
    if file_ext not in detected_exts:
        return None, (jsonify({
            'error': f'File extension .{file_ext} does not match actual image format'
        }), 400)

    return UploadedImage(file_data, file.filename, detected_mime), None
