from collections import Counter
from typing import Dict

from string_analyzer.identity import assign_identifier


def compute_palindrome(text: str) -> bool:
    """Check if string is a palindrome (case-insensitive, spaces and punctuation kept)"""
    folded = text.casefold()
    return folded == folded[::-1]


def compute_word_count(text: str) -> int:
    """Count words separated by runs of whitespace"""
    return len(text.split())


def compute_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of every character, whitespace included"""
    return dict(Counter(text))


def compute_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(compute_character_frequency(text))


def analyze_string(value: str) -> Dict:
    """Analyze a string and return all computed properties"""
    sha256_hash = assign_identifier(value)
    frequency = compute_character_frequency(value)

    return {
        "id": sha256_hash,
        "value": value,
        "length": len(value),
        "is_palindrome": compute_palindrome(value),
        "unique_characters": len(frequency),
        "word_count": compute_word_count(value),
        "sha256_hash": sha256_hash,
        "character_frequency_map": frequency,
    }
