from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from typing import Optional
import logging

from string_analyzer.exceptions import DuplicateValueError, NotFoundError
from string_analyzer.schemas import (
    FilterSet,
    NaturalLanguageResponse,
    Record,
    StringCreate,
    StringListResponse,
)
from string_analyzer.service import StringAnalyzerService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_service(request: Request) -> StringAnalyzerService:
    """Dependency to provide the application's shared service."""
    return request.app.state.service


@router.post("/strings", response_model=Record, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, service: StringAnalyzerService = Depends(get_service)):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    try:
        return service.create(string_data.value)
    except DuplicateValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.get("/strings", response_model=StringListResponse)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None, ge=0),
    max_length: Optional[int] = Query(None, ge=0),
    word_count: Optional[int] = Query(None, ge=0),
    contains_character: Optional[str] = Query(None, min_length=1, max_length=1),
    service: StringAnalyzerService = Depends(get_service),
):
    """
    Get all strings with optional filtering.
    """
    filters = FilterSet(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )
    strings = service.list(filters)

    return StringListResponse(
        data=strings,
        count=len(strings),
        filters_applied=filters.applied(),
    )


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    service: StringAnalyzerService = Depends(get_service),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    interpreted, strings = service.list_by_query(query)
    filters = interpreted.parsed_filters

    if filters.is_empty():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to parse natural language query",
        )

    if filters.is_conflicting():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Query parsed but resulted in conflicting filters",
                "interpreted_query": interpreted.as_dict(),
            },
        )

    return NaturalLanguageResponse(
        data=strings,
        count=len(strings),
        interpreted_query=interpreted.as_dict(),
    )


@router.get("/strings/{string_value:path}", response_model=Record)
def get_string(string_value: str, service: StringAnalyzerService = Depends(get_service)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    try:
        return service.get(string_value)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, service: StringAnalyzerService = Depends(get_service)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    try:
        service.delete(string_value)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return None
