"""OCR route: extract text from an uploaded page scan."""

import logging

from flask import Blueprint, request, jsonify, current_app

from folio.services.ocr import InvalidImageError, recognize
from folio.utils.images import get_image_from_request

ocr_bp = Blueprint('ocr', __name__)
logger = logging.getLogger(__name__)


@ocr_bp.route('', methods=['POST'])
def run_ocr():
    """Run OCR over multipart `image`. Optional form field `languages` (e.g. 'eng+ara')."""
    image, error = get_image_from_request('image')
    if error:
        return error

    languages = request.form.get('languages') or current_app.config['OCR_LANGUAGES']
    logger.info(f'Processing OCR for file {image.filename} ({len(image.data)} bytes, {languages})')

    try:
        result = recognize(
            image.data,
            languages=languages,
            tesseract_cmd=current_app.config.get('TESSERACT_CMD'),
        )
        return jsonify(result), 200
    except InvalidImageError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f'OCR processing error: {e}', exc_info=True)
        return jsonify({'error': 'OCR processing failed'}), 500
