"""Translation routes: LLM translation and lexical text analysis."""

import logging

from flask import Blueprint, request, jsonify

from folio.services.text_analysis import (
    TEXT_TYPES,
    analyze_text,
    classify_arabic_text,
    detect_language,
    get_text_direction,
)
from folio.services.translation import TranslationError, translate

translate_bp = Blueprint('translate', __name__)
logger = logging.getLogger(__name__)


@translate_bp.route('', methods=['POST'])
def translate_text():
    """Translate text with the selected model.

    Body: text, targetLanguage, model, sourceLanguage?, textType?
    sourceLanguage is detected from the script when omitted.
    """
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    target_language = data.get('targetLanguage')
    model = data.get('model')
    text_type = data.get('textType')

    if not text or not target_language or not model:
        return jsonify({'error': 'Missing required parameters'}), 400

    if text_type is not None and text_type not in TEXT_TYPES:
        return jsonify({'error': f"textType must be one of {', '.join(TEXT_TYPES)}"}), 400

    source_language = data.get('sourceLanguage') or detect_language(text)

    try:
        result = translate(text, source_language, target_language, model, text_type=text_type)
        return jsonify(result), 200
    except TranslationError as e:
        logger.error(f'Translation error: {e}')
        return jsonify({'error': 'Translation failed'}), 500
    except Exception as e:
        logger.error(f'Unexpected translation error: {e}', exc_info=True)
        return jsonify({'error': 'Translation failed'}), 500


@translate_bp.route('/analyze', methods=['POST'])
def analyze():
    """Detect language and direction, count lines and words, classify Arabic register."""
    data = request.get_json(silent=True) or {}
    text = data.get('text')

    if not text:
        return jsonify({'error': 'Text is required'}), 400

    language = detect_language(text)
    result = analyze_text(text)
    result['language'] = language
    result['direction'] = get_text_direction(language)
    result['classification'] = classify_arabic_text(text) if language == 'ara' else None
    return jsonify(result), 200
