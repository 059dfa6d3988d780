"""
Column types and defaults shared by the models
"""
from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Type

from sqlalchemy import JSON, Enum
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def enum_column_type(enum_cls: Type[PyEnum], name: str) -> Enum:
    """Store enum values as short strings guarded by a CHECK constraint"""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )
