"""
Natural language query interpretation.

Queries are matched against a small fixed table of phrase rules, not parsed
in any general sense. Each rule fires independently when its pattern appears
in the case-folded query; text no rule recognizes is ignored. Examples:

- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters" -> {min_length: 11}
- "strings containing the letter z" -> {contains_character: "z"}
"""
import logging
import re
from typing import Any, Callable, Dict, List, NamedTuple

from string_analyzer.schemas import FilterSet, InterpretedQuery

logger = logging.getLogger(__name__)


class PhraseRule(NamedTuple):
    name: str
    pattern: re.Pattern
    effect: Callable[[re.Match, Dict[str, Any]], None]


def _set_palindrome(match, filters):
    filters["is_palindrome"] = True


def _set_single_word(match, filters):
    filters["word_count"] = 1


def _set_longer_than(match, filters):
    # "longer than N" is strict
    filters["min_length"] = int(match.group(1)) + 1


def _set_contains_letter(match, filters):
    filters["contains_character"] = match.group(1)


def _set_shorter_than(match, filters):
    limit = int(match.group(1))
    if limit == 0:
        # Nothing is shorter than 0; leave a range no record can satisfy
        filters["max_length"] = 0
        filters["min_length"] = max(filters.get("min_length", 0), 1)
    else:
        filters["max_length"] = limit - 1


def _set_exact_length(match, filters):
    filters["min_length"] = filters["max_length"] = int(match.group(1))


def _set_word_count(match, filters):
    filters.setdefault("word_count", int(match.group(1)))


def _set_first_vowel(match, filters):
    filters.setdefault("contains_character", "a")


# Evaluated in order; later rules may defer to earlier ones.
# Numbers are capped at nine digits, longer ones leave the phrase unrecognized.
RULES: List[PhraseRule] = [
    PhraseRule("palindrome", re.compile(r"palindrom(?:ic|e)"), _set_palindrome),
    PhraseRule("single_word", re.compile(r"\b(?:single|one)\s+word"), _set_single_word),
    PhraseRule("longer_than", re.compile(r"longer\s+than\s+(\d{1,9})(?!\d)"), _set_longer_than),
    PhraseRule("contains_letter", re.compile(r"containing\s+the\s+letter\s+(\w)"), _set_contains_letter),
    PhraseRule("shorter_than", re.compile(r"shorter\s+than\s+(\d{1,9})(?!\d)"), _set_shorter_than),
    PhraseRule("exact_length", re.compile(r"exactly\s+(\d{1,9})(?!\d)\s+characters?"), _set_exact_length),
    PhraseRule("word_count", re.compile(r"\b(?:with|of|having)\s+(\d{1,9})\s+words\b"), _set_word_count),
    PhraseRule("first_vowel", re.compile(r"first\s+vowel"), _set_first_vowel),
]


def parse_natural_language_query(query: str) -> Dict[str, Any]:
    """Turn a free-text query into raw filter parameters"""
    folded = query.casefold()
    filters: Dict[str, Any] = {}

    for rule in RULES:
        match = rule.pattern.search(folded)
        if match:
            rule.effect(match, filters)

    return filters


def interpret(query: str) -> InterpretedQuery:
    """Interpret a query; unrecognized text yields an empty FilterSet, never an error"""
    parsed = parse_natural_language_query(query)
    if not parsed:
        logger.info(f"No filters recognized in query: {query!r}")

    return InterpretedQuery(original=query, parsed_filters=FilterSet(**parsed))
