"""
================================================================================
MagFinder v1.0 - Title Identity & Year Helpers
================================================================================
Leaf helpers shared by every fetcher:

  1. verify_identity(candidate, target) -> does this title name our periodical?
  2. extract_year(text) -> first plausible 20xx year in free text

Identity matching is permissive: source titles usually carry
issue/volume suffixes ("Widget Monthly - Issue 12"), so a cleaned substring
hit counts as a match. No edit-distance scoring.

Valid years are confined to [2000, 2025] (recent digitized magazines).
================================================================================
"""

import re
from typing import Optional, Union

UNKNOWN_YEAR = "Unknown"

MIN_YEAR = 2000
MAX_YEAR = 2025

# Tightest pattern first: a 20xx literal wins over any other 4-digit number
YEAR_PATTERNS = [
    re.compile(r'\b20\d{2}\b', re.ASCII),
    re.compile(r'\b\d{4}\b', re.ASCII),
]

_NON_WORD = re.compile(r'[^\w\s]')


def normalize_title(title: Optional[str]) -> str:
    """Lowercase and drop everything that is not a word char or whitespace."""
    if not title:
        return ""
    return _NON_WORD.sub('', title.lower())


def verify_identity(candidate_title: Optional[str], target_name: str) -> bool:
    """
    Check whether a source title refers to the target periodical.

    Args:
        candidate_title: Title as returned by the source
        target_name: Periodical name the user searched for

    Returns:
        True if the cleaned title equals or contains the cleaned target

    Examples:
        verify_identity("The Target Weekly Issue 4", "Target Weekly") -> True
        verify_identity("Unrelated Journal", "Target Weekly") -> False
    """
    if not candidate_title:
        return False

    clean_title = normalize_title(candidate_title)
    clean_target = normalize_title(target_name)

    return clean_title == clean_target or clean_target in clean_title


def is_year_in_range(year: Union[str, int, None]) -> bool:
    try:
        value = int(year)
    except (TypeError, ValueError):
        return False
    return MIN_YEAR <= value <= MAX_YEAR


def extract_year(text: Optional[str]) -> str:
    """
    Pull the first plausible year out of free text.

    Each pattern contributes only its first match; the first one that falls
    in [MIN_YEAR, MAX_YEAR] is returned. Otherwise UNKNOWN_YEAR.
    """
    if not text:
        return UNKNOWN_YEAR

    for pattern in YEAR_PATTERNS:
        match = pattern.search(text)
        if match and is_year_in_range(match.group(0)):
            return str(int(match.group(0)))

    return UNKNOWN_YEAR


def normalize_year(value: Union[str, int, None]) -> str:
    """Coerce a structured year field to an in-range string or UNKNOWN_YEAR."""
    if value is None or isinstance(value, bool):
        return UNKNOWN_YEAR
    if isinstance(value, int):
        return str(value) if is_year_in_range(value) else UNKNOWN_YEAR
    return extract_year(str(value))
