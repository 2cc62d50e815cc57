"""
Tests for OCR. Tesseract itself is replaced with canned results.
"""

import io

import pytest
import pytesseract

from folio.services.ocr import InvalidImageError, recognize


@pytest.fixture
def fake_tesseract(monkeypatch):
    calls = {}

    def image_to_string(image, lang=None):
        calls['lang'] = lang
        return '  بسم الله\nIn the name of God \n'

    def image_to_data(image, lang=None, output_type=None):
        return {
            'text': ['', 'بسم', 'الله', 'In', 'the', 'name', '', 'God'],
            'conf': ['-1', '90', '80', '95', '85', '70', '-1', '60'],
        }

    monkeypatch.setattr(pytesseract, 'image_to_string', image_to_string)
    monkeypatch.setattr(pytesseract, 'image_to_data', image_to_data)
    return calls


class TestRecognize:
    """Tests for folio.services.ocr.recognize"""

    def test_recognize(self, fake_tesseract, png_bytes):
        result = recognize(png_bytes, languages='ara+eng')

        assert result['text'] == 'بسم الله\nIn the name of God'
        assert result['words'] == 6
        assert result['confidence'] == 0.8
        assert fake_tesseract['lang'] == 'ara+eng'

    def test_recognize_no_words(self, monkeypatch, png_bytes):
        monkeypatch.setattr(pytesseract, 'image_to_string', lambda image, lang=None: '')
        monkeypatch.setattr(
            pytesseract, 'image_to_data',
            lambda image, lang=None, output_type=None: {'text': [''], 'conf': ['-1']},
        )

        result = recognize(png_bytes)

        assert result == {'text': '', 'confidence': 0.0, 'words': 0}

    def test_recognize_invalid_image(self, fake_tesseract):
        with pytest.raises(InvalidImageError):
            recognize(b'definitely not an image')


class TestOcrEndpoint:
    """Tests for POST /api/ocr"""

    def test_ocr_success(self, client, fake_tesseract, png_bytes):
        response = client.post('/api/ocr', data={
            'image': (io.BytesIO(png_bytes), 'page.png'),
        }, content_type='multipart/form-data')

        assert response.status_code == 200
        assert response.json['words'] == 6
        assert 0 <= response.json['confidence'] <= 1
        assert fake_tesseract['lang'] == 'eng+ara'

    def test_ocr_languages_override(self, client, fake_tesseract, png_bytes):
        client.post('/api/ocr', data={
            'image': (io.BytesIO(png_bytes), 'page.png'),
            'languages': 'ara',
        }, content_type='multipart/form-data')

        assert fake_tesseract['lang'] == 'ara'

    def test_ocr_no_image(self, client):
        response = client.post('/api/ocr', data={}, content_type='multipart/form-data')

        assert response.status_code == 400
        assert 'error' in response.json

    def test_ocr_not_an_image(self, client):
        response = client.post('/api/ocr', data={
            'image': (io.BytesIO(b'plain text pretending to be a scan'), 'page.png'),
        }, content_type='multipart/form-data')

        assert response.status_code == 400

    def test_ocr_engine_failure(self, client, monkeypatch, png_bytes):
        def broken(image, lang=None):
            raise pytesseract.TesseractNotFoundError()

        monkeypatch.setattr(pytesseract, 'image_to_string', broken)

        response = client.post('/api/ocr', data={
            'image': (io.BytesIO(png_bytes), 'page.png'),
        }, content_type='multipart/form-data')

        assert response.status_code == 500
        assert response.json == {'error': 'OCR processing failed'}
