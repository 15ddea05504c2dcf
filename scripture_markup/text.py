"""
Soft hyphenation of rendered lines before they are typeset.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Pattern

from bs4 import BeautifulSoup
from pyphen import Pyphen


SOFT_HYPHEN = "\u00ad"
MIN_WORD_LENGTH = 7

# Link text holds verse numbers and note callers.
_UNBREAKABLE_PARENTS = {"a"}


@lru_cache(maxsize=8)
def _word_pattern(min_length: int) -> Pattern[str]:
    return re.compile(rf"[^\W\d_]{{{min_length},}}")


def hyphenate_markup(
    markup: str, dic: Pyphen, *, min_length: int = MIN_WORD_LENGTH
) -> str:
    """Insert soft hyphens into long words of a ReportLab inline fragment.

    Args:
        markup: Inline markup as produced by the PDF line builder.
        dic: Hyphenation dictionary.
        min_length: Words shorter than this are left whole.
    Returns:
        The fragment with soft hyphens added. Tags, attributes and text
        inside links are untouched.

    Example:
        >>> dic = Pyphen(lang='en_US')
        >>> out = hyphenate_markup('<b>everlasting</b> <a href="verse:1">righteousness</a>', dic)
        >>> SOFT_HYPHEN in out, out.replace(SOFT_HYPHEN, '')
        (True, '<b>everlasting</b> <a href="verse:1">righteousness</a>')
        >>> SOFT_HYPHEN in out.split('<a')[1]
        False
    """

    pattern = _word_pattern(min_length)
    soup = BeautifulSoup(markup, "html.parser")
    for node in list(soup.strings):
        if node.parent is not None and node.parent.name in _UNBREAKABLE_PARENTS:
            continue
        value = str(node)
        hyphenated = pattern.sub(
            lambda match: dic.inserted(match.group(0), hyphen=SOFT_HYPHEN), value
        )
        if hyphenated != value:
            node.replace_with(hyphenated)
    return soup.decode_contents()
