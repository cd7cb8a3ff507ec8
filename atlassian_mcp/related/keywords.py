"""
Related - Keyword Extractor

Turns a page title or issue summary into search keywords.
"""

import re
from typing import List

MIN_KEYWORD_LENGTH = 4

_PUNCTUATION = re.compile(r"[^\w\s]")


def extract_keywords(text: str) -> List[str]:
    """
    Extract candidate keywords from free text.

    Tokens of three characters or fewer are dropped instead of using a
    stop-word list. Punctuation is stripped from the survivors. Case and
    duplicates are preserved.

    Args:
        text: Page title or issue summary

    Returns:
        Keywords in their original order (empty when there is no signal)
    """
    if not text:
        return []

    keywords = []
    for token in text.split():
        if len(token) < MIN_KEYWORD_LENGTH:
            continue
        cleaned = _PUNCTUATION.sub("", token)
        if len(cleaned) >= MIN_KEYWORD_LENGTH:
            keywords.append(cleaned)
    return keywords
