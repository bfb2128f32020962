"""
Base repository with table-scoped CRUD operations and error translation.

Every domain repository extends `BaseRepository`. Writes commit by default;
integrity violations surface as `ConflictError` and any other datastore
failure as `RepositoryError`, with the session rolled back first.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from smartmess.config.logging import get_logger
from smartmess.core.exceptions import ConflictError, RepositoryError
from smartmess.models.base import BaseModel
from smartmess.utils.date_utils import now_utc

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseRepository(Generic[ModelType]):
    """
    Generic repository bound to one model and one session.
    """

    conflict_message: str = "Record already exists"

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Transaction Management ====================

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"{action} {self.model.__name__} rejected by constraint: {e.orig}")
            raise ConflictError(self.conflict_message) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{action} {self.model.__name__} failed: {e}", exc_info=True)
            raise RepositoryError(f"{action} failed") from e

    def commit(self) -> None:
        """Commit current transaction."""
        with self._translate_errors("Commit"):
            self.db.commit()

    # ==================== Read Operations ====================

    def get(self, entity_id: str) -> Optional[ModelType]:
        """Fetch one row by primary key."""
        with self._translate_errors("Get"):
            return self.db.get(self.model, entity_id)

    def find_one(self, *criteria: Any, **filters: Any) -> Optional[ModelType]:
        """Fetch the first row matching the criteria, or None."""
        stmt = select(self.model).filter(*criteria).filter_by(**filters).limit(1)
        with self._translate_errors("Find"):
            return self.db.scalars(stmt).first()

    def list(
        self,
        *criteria: Any,
        order_by: Optional[Sequence[Any]] = None,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> List[ModelType]:
        """
        List rows matching the criteria.

        Args:
            criteria: SQLAlchemy boolean expressions
            order_by: Columns or ordering expressions
            limit: Maximum number of rows
            filters: Equality filters by attribute name
        """
        stmt = select(self.model).filter(*criteria).filter_by(**filters)
        if order_by is not None:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._translate_errors("List"):
            return list(self.db.scalars(stmt).all())

    def count(self, *criteria: Any, **filters: Any) -> int:
        """Count rows matching the criteria."""
        stmt = select(func.count()).select_from(self.model).filter(*criteria).filter_by(**filters)
        with self._translate_errors("Count"):
            return int(self.db.scalar(stmt) or 0)

    # ==================== Write Operations ====================

    def insert(self, entity: ModelType) -> ModelType:
        """
        Insert a new entity, relying on unique constraints for duplicates.

        Raises:
            ConflictError: If a unique constraint is violated
        """
        with self._translate_errors("Insert"):
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
        logger.info(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    def update(self, entity: ModelType, values: Dict[str, Any]) -> ModelType:
        """Apply attribute changes to an entity and commit."""
        for key, value in values.items():
            setattr(entity, key, value)
        with self._translate_errors("Update"):
            self.db.commit()
            self.db.refresh(entity)
        logger.debug(f"Updated {self.model.__name__} {entity.id}: {sorted(values)}")
        return entity

    def delete(self, entity: ModelType) -> None:
        """Hard delete an entity (ORM cascades apply)."""
        entity_id = entity.id
        with self._translate_errors("Delete"):
            self.db.delete(entity)
            self.db.commit()
        logger.info(f"Deleted {self.model.__name__} {entity_id}")

    def upsert(
        self,
        values: Dict[str, Any],
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> Tuple[ModelType, bool]:
        """
        Insert a row or update the existing one in a single statement.

        Runs ``INSERT ... ON CONFLICT (conflict_columns) DO UPDATE``, so
        concurrent writers targeting the same key cannot create duplicates.

        Args:
            values: Attribute values for the row
            conflict_columns: Attributes forming the unique key
            update_columns: Attributes overwritten when the key exists

        Returns:
            The stored entity and whether it was newly created (always
            False for tables without timestamps)
        """
        mapper = inspect(self.model)
        table = self.model.__table__

        def column_key(attr: str) -> str:
            return mapper.columns[attr].key

        dialect = self.db.get_bind().dialect.name
        try:
            insert = _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise RepositoryError(f"Upsert is not supported on {dialect}")

        now = now_utc()
        timestamped = "created_at" in table.c and "updated_at" in table.c
        row = {column_key(k): v for k, v in values.items()}
        if timestamped:
            # Identical timestamps on insert; an update moves only updated_at
            row.setdefault("created_at", now)
            row.setdefault("updated_at", now)

        stmt = insert(table).values(**row)
        set_: Dict[str, Any] = {column_key(c): stmt.excluded[column_key(c)] for c in update_columns}
        if timestamped:
            set_["updated_at"] = now
        if not set_:
            # Nothing to overwrite; keep the row as it is but still return it
            key = column_key(conflict_columns[0])
            set_[key] = table.c[key]

        returning = [table.c.id]
        if timestamped:
            returning += [table.c.created_at, table.c.updated_at]
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c[column_key(c)] for c in conflict_columns],
            set_=set_,
        ).returning(*returning)

        with self._translate_errors("Upsert"):
            result = self.db.execute(stmt).one()
            self.db.commit()
            entity = self.db.get(self.model, result.id, populate_existing=True)

        created = timestamped and result.created_at == result.updated_at
        logger.info(f"{'Created' if created else 'Updated'} {self.model.__name__} with id: {result.id}")
        return entity, created
