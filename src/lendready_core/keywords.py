"""Requirement tokenization shared by the matcher and the verification scorer."""

from typing import Iterable

# Characters removed from anywhere in a token
KEYWORD_STRIP_CHARS = ".,;:()"

_STRIP_TABLE = str.maketrans("", "", KEYWORD_STRIP_CHARS)

# Tokens of this length or shorter are too generic to score ("tax", "of", "id")
MIN_KEYWORD_LENGTH = 4


def tokenize_requirement(requirement: str) -> list[str]:
    """Split one requirement into its significant lowercase keywords."""
    keywords = []
    for raw in requirement.lower().split():
        token = raw.translate(_STRIP_TABLE)
        if len(token) >= MIN_KEYWORD_LENGTH:
            keywords.append(token)
    return keywords


def extract_keywords(requirements: Iterable[str]) -> list[str]:
    """Tokenize every requirement into one keyword list.

    Keywords keep requirement order, and duplicates across requirements are
    kept: "Articles of Incorporation" and "Certificate of Incorporation"
    contribute "incorporation" twice.

    Args:
        requirements: Requirement descriptions

    Returns:
        Lowercase keywords longer than three characters
    """
    keywords: list[str] = []
    for requirement in requirements:
        keywords.extend(tokenize_requirement(requirement))
    return keywords


def unique_in_order(items: Iterable[str]) -> list[str]:
    """Drop repeated items, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))
