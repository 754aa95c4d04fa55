from typing import List, Optional, Tuple
import logging

from string_analyzer import filters as filter_engine
from string_analyzer import nl_query
from string_analyzer.repository import Repository
from string_analyzer.schemas import FilterSet, InterpretedQuery, Record

logger = logging.getLogger(__name__)


class StringAnalyzerService:
    """The operations the HTTP layer calls; inputs are already validated strings."""

    def __init__(self, repository: Optional[Repository] = None):
        self.repository = repository if repository is not None else Repository()

    def create(self, value: str) -> Record:
        return self.repository.insert(value)

    def get(self, value: str) -> Record:
        return self.repository.find_by_value(value)

    def list(self, filters: Optional[FilterSet] = None) -> List[Record]:
        """All records matching the filters; an empty list is a normal result"""
        records = self.repository.list_all()
        if filters is None:
            return records
        return filter_engine.apply(records, filters)

    def list_by_query(self, query: str) -> Tuple[InterpretedQuery, List[Record]]:
        interpreted = nl_query.interpret(query)
        logger.info(f"Interpreted {query!r} as {interpreted.parsed_filters.applied()}")
        return interpreted, self.list(interpreted.parsed_filters)

    def delete(self, value: str) -> None:
        self.repository.delete_by_value(value)
