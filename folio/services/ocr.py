"""OCR for scanned pages using Tesseract."""

import io
import logging

import pytesseract
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class InvalidImageError(ValueError):
    """The uploaded bytes are not an image Pillow can read."""


def recognize(image_bytes: bytes, languages: str = 'eng+ara', tesseract_cmd: str = None) -> dict:
    """Run Tesseract over an image.

    Returns:
        dict with the recognized text, the mean word confidence scaled to
        0-1 and the number of recognized words.
    """
    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageError(f'File does not appear to be a valid image: {e}')

    with image:
        text = pytesseract.image_to_string(image, lang=languages)
        data = pytesseract.image_to_data(image, lang=languages, output_type=pytesseract.Output.DICT)

    # Tesseract reports -1 for non-word boxes (blocks, lines)
    confidences = [
        float(conf)
        for word, conf in zip(data.get('text', []), data.get('conf', []))
        if str(word).strip() and float(conf) >= 0
    ]
    confidence = sum(confidences) / len(confidences) / 100 if confidences else 0.0

    logger.info(f'OCR finished: {len(confidences)} words, confidence {confidence:.2f}')
    return {
        'text': text.strip(),
        'confidence': round(confidence, 4),
        'words': len(confidences),
    }
