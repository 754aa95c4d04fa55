from pydantic import BaseModel, Field
from typing import Dict, Optional, List, Any
from datetime import datetime


class StringCreate(BaseModel):
    value: str = Field(..., description="String to analyze")


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]

    class Config:
        frozen = True


class Record(BaseModel):
    """One analyzed string; a detached snapshot, never a live storage row."""

    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    class Config:
        frozen = True
        from_attributes = True


class FilterSet(BaseModel):
    """
    Conjunction of optional predicates over records.
    A field left as None places no constraint.
    """

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    contains_character: Optional[str] = Field(None, min_length=1, max_length=1)

    class Config:
        extra = "forbid"

    def applied(self) -> Dict[str, Any]:
        """Only the filters that were actually supplied"""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()

    def is_conflicting(self) -> bool:
        return (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        )


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: FilterSet

    def as_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "parsed_filters": self.parsed_filters.applied(),
        }


class StringListResponse(BaseModel):
    data: List[Record]
    count: int
    filters_applied: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[Record]
    count: int
    interpreted_query: Dict[str, Any]
