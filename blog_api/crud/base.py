"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from blog_api.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def paginate(db: Session, stmt: Select, *, page: int, limit: int) -> Tuple[List[Any], int]:
	"""Run `stmt` for one 1-indexed page and return (items, total).

	`stmt` must already carry its ordering; the total is counted over the
	same filters without ordering.
	"""
	total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0
	items = list(db.scalars(stmt.offset((page - 1) * limit).limit(limit)).all())
	return items, total


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Reusable CRUD helper for SQLAlchemy models.

	All methods operate on model instances and return database objects, not schemas.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def count(self, db: Session) -> int:
		return db.scalar(select(func.count()).select_from(self.model)) or 0

	# ----- Write helpers -----
	def save(self, db: Session, db_obj: ModelType) -> ModelType:
		"""Add, commit and refresh one object; roll back on failure."""
		try:
			db.add(db_obj)
			db.commit()
			db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj

	# ----- Create -----
	def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
		"""Create a new record from a Pydantic schema or dict."""
		obj_in_data: Dict[str, Any] = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		return self.save(db, self.model(**obj_in_data))  # type: ignore[arg-type]

	# ----- Update -----
	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Update a record with the fields set on a Pydantic schema or dict."""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

		for field, value in update_data.items():
			if hasattr(db_obj, field):
				setattr(db_obj, field, value)

		return self.save(db, db_obj)

	# ----- Delete -----
	def delete(self, db: Session, *, db_obj: ModelType) -> ModelType:
		"""Delete a record.

		Soft-deletes models with an `is_active` field; otherwise hard delete.
		Returns the affected object.
		"""
		try:
			if hasattr(db_obj, "is_active"):
				db_obj.is_active = False
				db.add(db_obj)
			else:
				db.delete(db_obj)
			db.commit()
			if hasattr(db_obj, "is_active"):
				db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj
