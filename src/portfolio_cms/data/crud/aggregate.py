"""Transactional reads and writes for a parent row and its child collections.

An aggregate is a parent table plus one or more child tables keyed by the
parent id. Every mutating call runs in exactly one transaction:

- create: insert parent, stamp its id onto every child, bulk insert children
- update: overwrite parent, delete *all* children, insert the new set
- delete: delete children, then the parent

Children are replaced, never merged. A caller that wants to add one child
reads the aggregate, edits the list and writes the whole set back.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio_cms.data.db import Base, Database, insert_ignoring_conflicts
from portfolio_cms.errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

ChildRows = Mapping[str, Sequence[Mapping[str, Any]]]


def row_to_dict(row: Base) -> dict[str, Any]:
    """Convert an ORM instance to a dict of its column values."""
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


@dataclass(frozen=True)
class ChildCollection:
    """Describes one child table of an aggregate.

    Attributes:
        key: Name of the list in the aggregate dict (e.g. "responsibilities").
        model: ORM model of the child table.
        parent_column: Foreign key column holding the parent id.
        order_by: Columns to sort children by, display order first.
        conflict_columns: Unique columns; when set, duplicate rows are dropped
            on insert instead of failing the transaction.
    """

    key: str
    model: type[Base]
    parent_column: str
    order_by: tuple[str, ...] = ("display_order", "id")
    conflict_columns: tuple[str, ...] | None = None


@contextmanager
def transaction(db: Database, action: str) -> Iterator[Session]:
    """Open one transaction and turn driver failures into PersistenceError."""
    try:
        with db.session() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.exception("Transaction failed while trying to %s", action)
        raise PersistenceError(f"Failed to {action}") from exc


class AggregateRepository:
    """Generic repository for one parent model and its child collections."""

    model: type[Base]
    entity_name: str = "Entity"
    children: tuple[ChildCollection, ...] = ()
    parent_order_by: tuple[Any, ...] = ()

    def __init__(self, db: Database) -> None:
        self.db = db

    # ---- writes ---------------------------------------------------------

    def create_with_children(self, fields: Mapping[str, Any], children: ChildRows) -> dict:
        with transaction(self.db, f"create {self.entity_name.lower()}") as session:
            parent = self.model(**fields)
            session.add(parent)
            session.flush()
            self._insert_children(session, parent.id, children)
            return self._load(session, parent.id)

    def update_with_children(
        self,
        entity_id: int,
        fields: Mapping[str, Any],
        children: ChildRows,
    ) -> dict:
        with transaction(self.db, f"update {self.entity_name.lower()} {entity_id}") as session:
            parent = self._get_parent(session, entity_id)
            for name, value in fields.items():
                setattr(parent, name, value)
            session.flush()

            for collection in self.children:
                if collection.key not in children:
                    continue
                session.execute(
                    delete(collection.model).where(
                        getattr(collection.model, collection.parent_column) == entity_id
                    )
                )
            self._insert_children(session, entity_id, children)
            return self._load(session, entity_id)

    def delete_with_children(self, entity_id: int) -> None:
        with transaction(self.db, f"delete {self.entity_name.lower()} {entity_id}") as session:
            parent = self._get_parent(session, entity_id)
            for collection in self.children:
                session.execute(
                    delete(collection.model).where(
                        getattr(collection.model, collection.parent_column) == entity_id
                    )
                )
            session.delete(parent)

    # ---- reads ----------------------------------------------------------

    def get_with_children(self, entity_id: int) -> dict:
        with transaction(self.db, f"load {self.entity_name.lower()} {entity_id}") as session:
            return self._load(session, entity_id)

    def list_with_children(self, **filters: Any) -> list[dict]:
        """Return all parents matching ``filters`` with their children attached.

        Issues one query for the parents and one per child collection,
        whatever the number of parents.
        """
        with transaction(self.db, f"list {self.entity_name.lower()} entries") as session:
            stmt = select(self.model).filter_by(**filters).order_by(*self._parent_order())
            parents = [row_to_dict(row) for row in session.scalars(stmt)]
            if not parents:
                return []

            ids = [parent["id"] for parent in parents]
            for collection in self.children:
                grouped = self._children_by_parent(session, collection, ids)
                for parent in parents:
                    parent[collection.key] = grouped.get(parent["id"], [])
            return parents

    # ---- helpers --------------------------------------------------------

    def _parent_order(self) -> tuple[Any, ...]:
        return self.parent_order_by or (self.model.id,)

    def _get_parent(self, session: Session, entity_id: int) -> Base:
        parent = session.get(self.model, entity_id)
        if parent is None:
            raise NotFoundError(self.entity_name, entity_id)
        return parent

    def _load(self, session: Session, entity_id: int) -> dict:
        result = row_to_dict(self._get_parent(session, entity_id))
        for collection in self.children:
            grouped = self._children_by_parent(session, collection, [entity_id])
            result[collection.key] = grouped.get(entity_id, [])
        return result

    def _children_by_parent(
        self,
        session: Session,
        collection: ChildCollection,
        parent_ids: Sequence[int],
    ) -> dict[int, list[dict]]:
        parent_column = getattr(collection.model, collection.parent_column)
        stmt = (
            select(collection.model)
            .where(parent_column.in_(parent_ids))
            .order_by(
                parent_column,
                *(getattr(collection.model, name) for name in collection.order_by),
            )
        )
        grouped: dict[int, list[dict]] = defaultdict(list)
        for child in session.scalars(stmt):
            data = row_to_dict(child)
            grouped[data[collection.parent_column]].append(data)
        return grouped

    def _insert_children(self, session: Session, parent_id: int, children: ChildRows) -> None:
        for collection in self.children:
            rows = [
                {**row, collection.parent_column: parent_id}
                for row in children.get(collection.key, ())
            ]
            if not rows:
                continue
            for row in rows:
                row.pop("id", None)

            if collection.conflict_columns:
                insert_ignoring_conflicts(
                    session, collection.model, rows, collection.conflict_columns
                )
            else:
                session.execute(insert(collection.model), rows)
