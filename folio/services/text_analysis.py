"""Lexical text analysis: script detection and Arabic register classification.

Everything here is deterministic and stateless. The register classifier
scores a text against five hand-written indicator sets; a matching pattern
is worth 2 points and a matching keyword 1 point. The category with the
highest score wins (ties go to the earlier category in TEXT_TYPES) and the
confidence is the gap between the two best scores relative to the best.
"""

import re

TEXT_TYPES = ('classical', 'religious', 'literary', 'technical', 'modern')
CLASSICAL_TEXT_TYPES = ('classical', 'religious', 'literary')

PATTERN_WEIGHT = 2
KEYWORD_WEIGHT = 1

ARABIC_SCRIPT = re.compile(r'[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]')
CHINESE_SCRIPT = re.compile(r'[\u4e00-\u9fff]')
CYRILLIC_SCRIPT = re.compile(r'[\u0400-\u04FF]')
ARABIC_DIACRITICS = re.compile(r'[\u064B-\u0652\u0670]')
ARABIC_WORD = re.compile(r'[\u0621-\u064A\u0671-\u06D3]+')

RTL_LANGUAGES = {'ara', 'heb', 'far', 'fas', 'urd', 'ar', 'he', 'fa', 'ur'}
ARABIC_CODES = {'ara', 'ar'}

INDICATORS = {
    'classical': {
        'patterns': [
            ('full vocalization', re.compile(r'[\u064B-\u0652]\S*[\u064B-\u0652]')),
            ('vocative ya ayyuha', re.compile(r'يا\s*أيها')),
            ('oath la-amri', re.compile(r'لعمر')),
            ('narrative qala', re.compile(r'(^|\s)(فقال|قال)\s')),
        ],
        'keywords': ['فلما', 'إذ', 'لعل', 'كلا', 'إياك', 'لدن', 'ذلك', 'أولئك', 'هاهنا', 'قط'],
    },
    'religious': {
        'patterns': [
            ('basmala', re.compile(r'بسم\s+الله')),
            ('divine name', re.compile(r'(^|\s)(الله|لله|بالله|والله)(\s|$)')),
            ('prophetic blessing', re.compile(r'صلى\s+الله\s+عليه\s+وسلم')),
            ('chain of narration', re.compile(r'(حدثنا|أخبرنا|عن\s+النبي)')),
            ('scripture reference', re.compile(r'(سورة|آية|الآية)')),
        ],
        'keywords': ['الرحمن', 'الرحيم', 'النبي', 'رسول', 'القرآن', 'الصلاة', 'الزكاة', 'الإيمان',
                     'الجنة', 'سبحانه', 'تعالى', 'المسلمين'],
    },
    'literary': {
        'patterns': [
            ('hemistich separator', re.compile(r'(\*\*\*|…|\.\.\.)')),
            ('poetry vocabulary', re.compile(r'(قصيدة|ديوان|شاعر|الشعر)')),
            ('lover address', re.compile(r'(حبيبي|ليلى|الهوى)')),
        ],
        'keywords': ['القمر', 'الليل', 'الحب', 'الشوق', 'الدموع', 'الفؤاد', 'القلب', 'الورد',
                     'النسيم', 'الحنين'],
    },
    'technical': {
        'patterns': [
            ('digits', re.compile(r'[0-9\u0660-\u0669]+')),
            ('latin terms', re.compile(r'[A-Za-z]{3,}')),
            ('units and percentages', re.compile(r'(%|٪|كم|كغ|ميغا)')),
            ('enumeration', re.compile(r'(أولا|ثانيا|ثالثا)')),
        ],
        'keywords': ['نظام', 'تقنية', 'البيانات', 'تحليل', 'منهج', 'دراسة', 'نتائج', 'معادلة',
                     'برنامج', 'الحاسوب'],
    },
    'modern': {
        'patterns': [
            ('contemporary year', re.compile(r'(19|20)\d{2}')),
            ('modern institutions', re.compile(r'(الحكومة|الوزارة|الرئيس|الشركة)')),
            ('media', re.compile(r'(الإنترنت|التلفزيون|الصحافة|وسائل التواصل)')),
        ],
        'keywords': ['اليوم', 'حاليا', 'الاقتصاد', 'السياسة', 'المجتمع', 'التكنولوجيا', 'الجامعة',
                     'الهاتف', 'المواطنين', 'الدولة'],
    },
}


def detect_language(text: str) -> str:
    """Guess a Tesseract language code from the script of the text."""
    if ARABIC_SCRIPT.search(text):
        return 'ara'
    if CHINESE_SCRIPT.search(text):
        return 'chi_sim'
    if CYRILLIC_SCRIPT.search(text):
        return 'rus'
    return 'eng'


def get_text_direction(language_code: str) -> str:
    return 'rtl' if language_code in RTL_LANGUAGES else 'ltr'


def is_arabic(language_code) -> bool:
    return language_code in ARABIC_CODES


def analyze_text(text: str) -> dict:
    lines = [line for line in text.split('\n') if line.strip()]
    words = text.split()
    return {
        'lineCount': len(lines),
        'wordCount': len(words),
        'characterCount': len(text),
        'hasArabic': bool(re.search(r'[\u0600-\u06FF]', text)),
        'hasEnglish': bool(re.search(r'[a-zA-Z]', text)),
        'hasNumbers': bool(re.search(r'\d', text)),
    }


def _tokens(text):
    tokens = set()
    for word in ARABIC_WORD.findall(ARABIC_DIACRITICS.sub('', text)):
        tokens.add(word)
        # conjunctions wa-/fa- are written attached to the next word
        if len(word) > 2 and word[0] in 'وف':
            tokens.add(word[1:])
    return tokens


def classify_arabic_text(text: str) -> dict:
    """Score a text against each register and pick the best one.

    Returns the winning textType, its confidence in [0, 1], the matched
    indicators of the winner and the raw score of every category.
    """
    tokens = _tokens(text)
    scores = {}
    matched = {}

    for text_type in TEXT_TYPES:
        indicators = INDICATORS[text_type]
        hits = [label for label, pattern in indicators['patterns'] if pattern.search(text)]
        keywords = [keyword for keyword in indicators['keywords'] if keyword in tokens]
        scores[text_type] = PATTERN_WEIGHT * len(hits) + KEYWORD_WEIGHT * len(keywords)
        matched[text_type] = hits + keywords

    ranked = sorted(TEXT_TYPES, key=lambda t: (-scores[t], TEXT_TYPES.index(t)))
    best, runner_up = ranked[0], ranked[1]

    if scores[best] == 0:
        return {'textType': 'modern', 'confidence': 0.0, 'indicators': [], 'scores': scores}

    confidence = (scores[best] - scores[runner_up]) / scores[best]
    return {
        'textType': best,
        'confidence': round(confidence, 4),
        'indicators': matched[best],
        'scores': scores,
    }
