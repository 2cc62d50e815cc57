"""
Tests for page reference parsing.
"""

import pytest

from folio.services.page_refs import RootPageRef, TranslationRef, parse_page_ref, translation_page_id


@pytest.mark.parametrize('page_id, expected', [
    ('pagegroup-1700000000000-abc123def', RootPageRef('pagegroup-1700000000000-abc123def')),
    ('pagegroup-1700000000000-abc123def_spa', TranslationRef('pagegroup-1700000000000-abc123def', 'spa')),
    ('pagegroup-1-a_chi_sim', TranslationRef('pagegroup-1-a', 'chi_sim')),
    ('trailing_', RootPageRef('trailing_')),
    ('_leading', RootPageRef('_leading')),
])
def test_parse_page_ref(page_id, expected):
    assert parse_page_ref(page_id) == expected


def test_translation_page_id_round_trip():
    page_id = translation_page_id('pagegroup-1-a', 'chi_sim')

    assert page_id == 'pagegroup-1-a_chi_sim'
    assert parse_page_ref(page_id) == TranslationRef('pagegroup-1-a', 'chi_sim')


def test_refs_render_as_page_ids():
    assert str(RootPageRef('pagegroup-1-a')) == 'pagegroup-1-a'
    assert str(TranslationRef('pagegroup-1-a', 'fra')) == 'pagegroup-1-a_fra'
