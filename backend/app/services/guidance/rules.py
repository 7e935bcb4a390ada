"""
Ordered keyword rules shared by the guidance answers.

Questions are lower-cased, punctuation becomes a space and the text is
padded with spaces, so a phrase written as " au " only matches the whole
word while "utilization" still matches anywhere.
"""
import re
from typing import List, Tuple, TypeVar

T = TypeVar("T")

# (result, any of these phrases, all of these phrases)
Rule = Tuple[T, Tuple[str, ...], Tuple[str, ...]]

_PUNCTUATION = re.compile(r"[^a-z0-9%$-]+")


def normalize_question(text: str) -> str:
    return f" {_PUNCTUATION.sub(' ', (text or '').lower()).strip()} "


def first_match(text: str, rules: List[Rule], default: T) -> T:
    """First rule whose phrases match wins."""
    normalized = normalize_question(text)
    for result, any_of, all_of in rules:
        if any_of and not any(phrase in normalized for phrase in any_of):
            continue
        if all(phrase in normalized for phrase in all_of):
            return result
    return default
