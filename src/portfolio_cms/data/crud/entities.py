"""Single-table repository used by entities without child collections."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select

from portfolio_cms.data.crud.aggregate import row_to_dict, transaction
from portfolio_cms.data.db import Base, Database
from portfolio_cms.errors import NotFoundError


class EntityRepository:
    """CRUD for one ORM model. Every call is its own transaction."""

    def __init__(
        self,
        db: Database,
        model: type[Base],
        *,
        entity_name: str,
        order_by: tuple[Any, ...] = (),
    ) -> None:
        self.db = db
        self.model = model
        self.entity_name = entity_name
        self.order_by = order_by or (model.id,)

    def create(self, fields: Mapping[str, Any]) -> dict:
        with transaction(self.db, f"create {self.entity_name.lower()}") as session:
            row = self.model(**fields)
            session.add(row)
            session.flush()
            return row_to_dict(row)

    def get(self, entity_id: int) -> dict:
        with transaction(self.db, f"load {self.entity_name.lower()} {entity_id}") as session:
            row = session.get(self.model, entity_id)
            if row is None:
                raise NotFoundError(self.entity_name, entity_id)
            return row_to_dict(row)

    def update(self, entity_id: int, fields: Mapping[str, Any]) -> dict:
        with transaction(self.db, f"update {self.entity_name.lower()} {entity_id}") as session:
            row = session.get(self.model, entity_id)
            if row is None:
                raise NotFoundError(self.entity_name, entity_id)
            for name, value in fields.items():
                setattr(row, name, value)
            session.flush()
            return row_to_dict(row)

    def delete(self, entity_id: int) -> None:
        with transaction(self.db, f"delete {self.entity_name.lower()} {entity_id}") as session:
            row = session.get(self.model, entity_id)
            if row is None:
                raise NotFoundError(self.entity_name, entity_id)
            session.delete(row)

    def list(self, **filters: Any) -> list[dict]:
        with transaction(self.db, f"list {self.entity_name.lower()} entries") as session:
            stmt = select(self.model).filter_by(**filters).order_by(*self.order_by)
            return [row_to_dict(row) for row in session.scalars(stmt)]
