from typing import Iterable, List

from string_analyzer.schemas import FilterSet, Record


def matches(record: Record, filters: FilterSet) -> bool:
    """Check a single record against every supplied filter"""
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    # Case-sensitive, same as duplicate detection
    if filters.contains_character is not None and filters.contains_character not in record.value:
        return False

    return True


def apply(records: Iterable[Record], filters: FilterSet) -> List[Record]:
    """Keep the records that satisfy all filters, preserving their order"""
    return [record for record in records if matches(record, filters)]
