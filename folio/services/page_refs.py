"""Page references for the legacy per-language page view.

A page is either the root text of a page group or one of its translations.
On the wire a translation page is addressed as '{page_group_id}_{language}'.
Page group ids never contain '_', so the id is split on the first underscore
and language codes such as 'chi_sim' survive intact.
"""

from dataclasses import dataclass
from typing import Union

SEPARATOR = '_'


@dataclass(frozen=True)
class RootPageRef:
    page_group_id: str

    def __str__(self):
        return self.page_group_id


@dataclass(frozen=True)
class TranslationRef:
    page_group_id: str
    language: str

    def __str__(self):
        return f'{self.page_group_id}{SEPARATOR}{self.language}'


PageRef = Union[RootPageRef, TranslationRef]


def parse_page_ref(page_id: str) -> PageRef:
    """Turn a page id from a request into a RootPageRef or TranslationRef."""
    page_group_id, sep, language = page_id.partition(SEPARATOR)
    if sep and page_group_id and language:
        return TranslationRef(page_group_id, language)
    return RootPageRef(page_id)


def translation_page_id(page_group_id: str, language: str) -> str:
    return str(TranslationRef(page_group_id, language))
