"""LLM translation with swappable providers.

The model id chosen in the UI decides the provider. '-classical' model ids
are the same upstream models but always get the classical-Arabic prompt.
"""

import logging

import requests
from flask import current_app

from folio.services.prompts import (
    PromptConfig,
    create_classical_arabic_prompt,
    create_modern_prompt,
)
from folio.services.text_analysis import (
    CLASSICAL_TEXT_TYPES,
    TEXT_TYPES,
    classify_arabic_text,
    is_arabic,
)

logger = logging.getLogger(__name__)

OPENAI_URL = 'https://api.openai.com/v1/chat/completions'
ANTHROPIC_URL = 'https://api.anthropic.com/v1/messages'
ANTHROPIC_VERSION = '2023-06-01'

# Low temperature for consistent scholarly output, room for explanatory notes
TEMPERATURE = 0.2
MAX_OUTPUT_TOKENS = 4000

MODEL_ROUTES = {
    'gpt-4o-classical': ('openai', 'gpt-4o'),
    'gpt-4o': ('openai', 'gpt-4o'),
    'gpt-4-turbo': ('openai', 'gpt-4-turbo'),
    'claude-3-5-sonnet-classical': ('anthropic', 'claude-3-5-sonnet-20241022'),
    'claude-3-5-sonnet': ('anthropic', 'claude-3-5-sonnet-20241022'),
}
DEFAULT_ROUTE = ('openai', 'gpt-4o')


class TranslationError(Exception):
    """The provider could not produce a translation."""


def resolve_model(model: str):
    """Return (provider, upstream model name) for a model id."""
    return MODEL_ROUTES.get(model, DEFAULT_ROUTE)


def resolve_text_type(text: str, source_language, text_type=None) -> str:
    """Declared type wins; Arabic input is classified; anything else is modern."""
    if text_type in TEXT_TYPES:
        return text_type
    if is_arabic(source_language):
        return classify_arabic_text(text)['textType']
    return 'modern'


def uses_classical_prompt(source_language, model: str, text_type) -> bool:
    return is_arabic(source_language) and (
        'classical' in (model or '') or text_type in CLASSICAL_TEXT_TYPES
    )


def build_prompt(text: str, config: PromptConfig) -> str:
    if uses_classical_prompt(config.source_language, config.model, config.text_type):
        return create_classical_arabic_prompt(config, text)
    return create_modern_prompt(config, text)


def openai_complete(prompt: str, model_name: str, api_key: str, timeout: float) -> str:
    """Send a single user message to the OpenAI chat completions API."""
    if not api_key:
        raise TranslationError('OPENAI_API_KEY is not configured')

    try:
        response = requests.post(
            OPENAI_URL,
            headers={'Authorization': f'Bearer {api_key}'},
            json={
                'model': model_name,
                'messages': [{'role': 'user', 'content': prompt}],
                'temperature': TEMPERATURE,
                'max_tokens': MAX_OUTPUT_TOKENS,
            },
            timeout=timeout,
        )
        result = response.json()
    except requests.Timeout:
        raise TranslationError('OpenAI request timed out')
    except (requests.RequestException, ValueError) as e:
        raise TranslationError(f'OpenAI request failed: {e}')

    if response.status_code != 200 or 'choices' not in result:
        message = result.get('error', {}).get('message', 'unexpected response format')
        raise TranslationError(f'OpenAI error ({response.status_code}): {message}')

    return result['choices'][0]['message']['content']


def anthropic_complete(prompt: str, model_name: str, api_key: str, timeout: float) -> str:
    """Send a single user message to the Anthropic messages API."""
    if not api_key:
        raise TranslationError('ANTHROPIC_API_KEY is not configured')

    try:
        response = requests.post(
            ANTHROPIC_URL,
            headers={
                'x-api-key': api_key,
                'anthropic-version': ANTHROPIC_VERSION,
            },
            json={
                'model': model_name,
                'max_tokens': MAX_OUTPUT_TOKENS,
                'temperature': TEMPERATURE,
                'messages': [{'role': 'user', 'content': prompt}],
            },
            timeout=timeout,
        )
        result = response.json()
    except requests.Timeout:
        raise TranslationError('Anthropic request timed out')
    except (requests.RequestException, ValueError) as e:
        raise TranslationError(f'Anthropic request failed: {e}')

    if response.status_code != 200 or 'content' not in result:
        message = result.get('error', {}).get('message', 'unexpected response format')
        raise TranslationError(f'Anthropic error ({response.status_code}): {message}')

    return ''.join(
        block.get('text', '') for block in result['content'] if block.get('type') == 'text'
    )


def translate(text: str, source_language, target_language: str, model: str, text_type=None) -> dict:
    """Translate text with the provider behind `model`.

    Returns:
        dict with translatedText, usedClassicalPrompt, textType and model.
    """
    resolved_type = resolve_text_type(text, source_language, text_type)
    config = PromptConfig(
        source_language=source_language,
        target_language=target_language,
        model=model,
        text_type=resolved_type,
    )
    classical = uses_classical_prompt(source_language, model, resolved_type)
    prompt = build_prompt(text, config)

    provider, model_name = resolve_model(model)
    timeout = current_app.config.get('TRANSLATION_TIMEOUT', 60)
    logger.info(
        f'Translating {len(text)} chars {source_language} -> {target_language} '
        f'with {provider}/{model_name} (textType={resolved_type}, classical={classical})'
    )

    if provider == 'anthropic':
        translated = anthropic_complete(prompt, model_name, current_app.config.get('ANTHROPIC_API_KEY'), timeout)
    else:
        translated = openai_complete(prompt, model_name, current_app.config.get('OPENAI_API_KEY'), timeout)

    return {
        'translatedText': translated,
        'usedClassicalPrompt': classical,
        'textType': resolved_type,
        'model': model,
    }
