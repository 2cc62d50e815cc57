"""
Tests for script detection and the Arabic register classifier.
"""

import pytest

from folio.services.text_analysis import (
    INDICATORS,
    TEXT_TYPES,
    analyze_text,
    classify_arabic_text,
    detect_language,
    get_text_direction,
)


class TestDetectLanguage:

    @pytest.mark.parametrize('text, expected', [
        ('مرحبا بالعالم', 'ara'),
        ('你好，世界', 'chi_sim'),
        ('Привет мир', 'rus'),
        ('Hello world', 'eng'),
        ('', 'eng'),
    ])
    def test_detect_language(self, text, expected):
        assert detect_language(text) == expected

    @pytest.mark.parametrize('code, direction', [
        ('ara', 'rtl'), ('heb', 'rtl'), ('fas', 'rtl'), ('urd', 'rtl'),
        ('eng', 'ltr'), ('chi_sim', 'ltr'),
    ])
    def test_text_direction(self, code, direction):
        assert get_text_direction(code) == direction


class TestAnalyzeText:

    def test_counts_and_flags(self):
        result = analyze_text('السلام عليكم\n\nChapter 12')

        assert result['lineCount'] == 2
        assert result['wordCount'] == 4
        assert result['hasArabic'] is True
        assert result['hasEnglish'] is True
        assert result['hasNumbers'] is True


class TestClassifyArabicText:

    def test_every_category_has_indicators(self):
        assert set(INDICATORS) == set(TEXT_TYPES)
        for indicators in INDICATORS.values():
            assert indicators['patterns']
            assert indicators['keywords']

    def test_religious_text(self):
        result = classify_arabic_text('بسم الله الرحمن الرحيم قال رسول الله صلى الله عليه وسلم')

        assert result['textType'] == 'religious'
        assert 'basmala' in result['indicators']
        assert 0 < result['confidence'] <= 1

    def test_literary_text(self):
        result = classify_arabic_text('في الليل يبكي القلب من الشوق والحنين إلى ليلى')

        assert result['textType'] == 'literary'

    def test_technical_text(self):
        result = classify_arabic_text('تحليل البيانات في نظام الحاسوب يعطي نتائج بنسبة 95%')

        assert result['textType'] == 'technical'

    def test_modern_text(self):
        result = classify_arabic_text('أعلنت الحكومة اليوم عن خطة لدعم الاقتصاد في عام 2023')

        assert result['textType'] == 'modern'

    def test_no_indicators_defaults_to_modern(self):
        result = classify_arabic_text('كتب')

        assert result == {
            'textType': 'modern',
            'confidence': 0.0,
            'indicators': [],
            'scores': {text_type: 0 for text_type in TEXT_TYPES},
        }

    def test_confidence_is_gap_over_top_score(self):
        result = classify_arabic_text('بسم الله الرحمن')
        scores = sorted(result['scores'].values(), reverse=True)

        assert result['confidence'] == round((scores[0] - scores[1]) / scores[0], 4)

    def test_tie_goes_to_earlier_category(self):
        # one classical keyword and one religious keyword
        result = classify_arabic_text('إذ النبي')

        assert result['scores']['classical'] == result['scores']['religious'] == 1
        assert result['textType'] == 'classical'
        assert result['confidence'] == 0.0

    def test_prefixed_conjunction_matches_keyword(self):
        result = classify_arabic_text('والقمر')

        assert result['scores']['literary'] == 1

    def test_deterministic(self):
        text = 'فلما قال الشيخ ذلك سكت القوم'

        assert classify_arabic_text(text) == classify_arabic_text(text)
