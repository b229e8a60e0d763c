"""
Database models for Horizon API.

SQLAlchemy ORM models for project sale and vesting records.
"""

import json
from typing import Any, List, Optional

from sqlalchemy import Column, DateTime, Index, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator

Base: Any = declarative_base()


class JSONEncodedList(TypeDecorator):
    """
    Integer sequence stored as JSON text.

    Encoding happens only at the persistence boundary. A stored value that
    fails to parse, or parses to something other than a list of integers,
    reads back as an empty list.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[List[int]], dialect) -> str:
        if value is None:
            return "[]"
        return json.dumps([int(item) for item in value])

    def process_result_value(self, value: Optional[str], dialect) -> List[int]:
        if not value:
            return []
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            return []
        if not isinstance(decoded, list):
            return []
        if not all(isinstance(item, int) and not isinstance(item, bool) for item in decoded):
            return []
        return decoded


class Project(Base):
    """
    Token sale project with its registration window and vesting schedule.

    Attributes:
        id: Primary key identifier
        sale_start: Start of the token sale
        sale_end: End of the token sale
        registration_time_starts: Registration window opening
        registration_time_ends: Registration window closing
        tge: Token generation event
        unlock_time: Initial unlock time of the vesting schedule
        vesting_portions_unlock_time: Unlock timestamp of each vesting portion
        vesting_percent_per_portion: Percentage released by each portion
        create_time: Timestamp of record creation
        update_time: Timestamp of last record update
    """

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    sale_start = Column(DateTime, nullable=False)
    sale_end = Column(DateTime, nullable=False)
    registration_time_starts = Column(DateTime, nullable=False)
    registration_time_ends = Column(DateTime, nullable=False)
    tge = Column(DateTime, nullable=False)
    unlock_time = Column(DateTime, nullable=False)

    vesting_portions_unlock_time = Column(JSONEncodedList, nullable=False, default=list)
    vesting_percent_per_portion = Column(JSONEncodedList, nullable=False, default=list)

    create_time = Column(DateTime, default=func.now(), nullable=False)
    update_time = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (Index("idx_projects_create_time", "create_time"),)

    def __repr__(self) -> str:
        return f"<Project id={self.id} sale_start={self.sale_start}>"
