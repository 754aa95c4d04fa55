from datetime import datetime, timezone
from typing import List, Optional
import logging
import threading

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from string_analyzer.analysis import analyze_string
from string_analyzer.database import build_engine, build_session_factory, init_db
from string_analyzer.exceptions import DuplicateValueError, NotFoundError
from string_analyzer.identity import assign_identifier
from string_analyzer.models import StringAnalysis
from string_analyzer.schemas import Record, StringProperties

logger = logging.getLogger(__name__)


def to_record(row: StringAnalysis) -> Record:
    """Copy a storage row into a detached Record"""
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; everything is stored in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return Record(
        id=row.id,
        value=row.value,
        properties=StringProperties(
            length=row.length,
            is_palindrome=row.is_palindrome,
            unique_characters=row.unique_characters,
            word_count=row.word_count,
            sha256_hash=row.sha256_hash,
            character_frequency_map=dict(row.character_frequency_map),
        ),
        created_at=created_at,
    )


class Repository:
    """
    Ordered collection of analyzed strings.

    Values are unique under case-sensitive exact comparison. Every operation
    holds the same lock, so concurrent requests never interleave inserts and
    deletes. Callers only ever see Record snapshots.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine if engine is not None else build_engine()
        init_db(self.engine)
        self._session_factory = build_session_factory(self.engine)
        self._lock = threading.RLock()

    def _get_row(self, db: Session, value: str) -> Optional[StringAnalysis]:
        row = db.query(StringAnalysis).filter(StringAnalysis.id == assign_identifier(value)).first()
        # Compare the raw value as well; the digest only narrows the lookup
        if row is not None and row.value == value:
            return row
        return None

    def insert(self, value: str) -> Record:
        """Analyze and store a string; raises DuplicateValueError if already stored"""
        analysis_data = analyze_string(value)

        with self._lock, self._session_factory() as db:
            if self._get_row(db, value) is not None:
                logger.warning(f"Rejected duplicate string {analysis_data['id'][:12]}")
                raise DuplicateValueError(value)

            db_string = StringAnalysis(
                id=analysis_data["id"],
                value=analysis_data["value"],
                length=analysis_data["length"],
                is_palindrome=analysis_data["is_palindrome"],
                unique_characters=analysis_data["unique_characters"],
                word_count=analysis_data["word_count"],
                sha256_hash=analysis_data["sha256_hash"],
                character_frequency_map=analysis_data["character_frequency_map"],
                created_at=datetime.now(timezone.utc),
            )
            db.add(db_string)
            db.commit()
            logger.info(f"Stored string {db_string.id[:12]} (length {db_string.length})")
            return to_record(db_string)

    def find_by_value(self, value: str) -> Record:
        """Get a record by exact value"""
        with self._lock, self._session_factory() as db:
            row = self._get_row(db, value)
            if row is None:
                raise NotFoundError(value)
            return to_record(row)

    def find_by_id(self, string_id: str) -> Record:
        """Get a record by its SHA-256 id"""
        with self._lock, self._session_factory() as db:
            row = db.query(StringAnalysis).filter(StringAnalysis.id == string_id).first()
            if row is None:
                raise NotFoundError(string_id)
            return to_record(row)

    def delete_by_value(self, value: str) -> None:
        """Delete a record by exact value"""
        with self._lock, self._session_factory() as db:
            row = self._get_row(db, value)
            if row is None:
                raise NotFoundError(value)
            db.delete(row)
            db.commit()
            logger.info(f"Deleted string {row.id[:12]}")

    def list_all(self) -> List[Record]:
        """Snapshot of every record in insertion order"""
        with self._lock, self._session_factory() as db:
            rows = db.query(StringAnalysis).order_by(StringAnalysis.seq).all()
            return [to_record(row) for row in rows]

    def count(self) -> int:
        with self._lock, self._session_factory() as db:
            return db.query(StringAnalysis).count()

    def clear(self) -> None:
        with self._lock, self._session_factory() as db:
            db.query(StringAnalysis).delete()
            db.commit()
