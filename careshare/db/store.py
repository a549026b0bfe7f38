"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from careshare.config import settings
from careshare.core.exceptions import StoreConflictError, StoreUnavailableError
from careshare.db import models
from careshare.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

COLLECTIONS = {
    "volunteers": models.Volunteer,
    "shifts": models.ShiftRecord,
    "centers": models.Center,
}

_SET_TYPES = (list, tuple, set, frozenset)


class DocumentStore:
    """
    Collection-oriented access to the database.

    Filters are equality matches, or set-membership when the value is a
    list, tuple or set. ``ranges`` maps a field to inclusive ``(low, high)``
    bounds, either of which may be None. ``order_by`` names a field; a
    leading ``-`` sorts descending. Reads are retried ``read_retries`` times
    when the database is unreachable; writes are never retried.
    """

    def __init__(self, db: Session, read_retries: Optional[int] = None):
        self.db = db
        self.read_retries = settings.store_read_retries if read_retries is None else read_retries

    def _model(self, collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection '{collection}'") from None

    def _read(self, collection: str, operation: Callable[[], T]) -> T:
        attempts = self.read_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return operation()
            except OperationalError as exc:
                self.db.rollback()
                logger.warning("Read from '%s' failed (attempt %d/%d): %s", collection, attempt, attempts, exc)
                if attempt == attempts:
                    raise StoreUnavailableError(f"Store unavailable while reading '{collection}'") from exc

    def _write(self, collection: str, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except IntegrityError as exc:
            self.db.rollback()
            raise StoreConflictError(f"Write to '{collection}' violates a uniqueness constraint") from exc
        except OperationalError as exc:
            self.db.rollback()
            logger.error("Write to '%s' failed: %s", collection, exc)
            raise StoreUnavailableError(f"Store unavailable while writing '{collection}'") from exc

    def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        ranges: Optional[Dict[str, Tuple[Any, Any]]] = None,
    ) -> List[Any]:
        model = self._model(collection)

        def run():
            query = self.db.query(model)
            for field, value in (filters or {}).items():
                column = getattr(model, field)
                if isinstance(value, _SET_TYPES):
                    query = query.filter(column.in_(list(value)))
                else:
                    query = query.filter(column == value)
            for field, (low, high) in (ranges or {}).items():
                column = getattr(model, field)
                if low is not None:
                    query = query.filter(column >= low)
                if high is not None:
                    query = query.filter(column <= high)
            if order_by:
                descending = order_by.startswith("-")
                column = getattr(model, order_by.lstrip("-"))
                query = query.order_by(column.desc() if descending else column.asc())
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

        return self._read(collection, run)

    def get(self, collection: str, document_id: int):
        model = self._model(collection)
        return self._read(collection, lambda: self.db.get(model, document_id))

    def insert(self, collection: str, fields: Dict[str, Any]):
        model = self._model(collection)

        def run():
            document = model(**fields)
            self.db.add(document)
            self.db.commit()
            self.db.refresh(document)
            return document

        return self._write(collection, run)

    def update(self, collection: str, document_id: int, fields: Dict[str, Any]):
        document = self.get(collection, document_id)
        if document is None:
            return None

        def run():
            for key, value in fields.items():
                setattr(document, key, value)
            self.db.commit()
            self.db.refresh(document)
            return document

        return self._write(collection, run)

    def delete(self, collection: str, document_id: int) -> bool:
        document = self.get(collection, document_id)
        if document is None:
            return False

        def run():
            self.db.delete(document)
            self.db.commit()
            return True

        return self._write(collection, run)
