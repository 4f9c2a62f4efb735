from typing import Optional

from sqlalchemy import Column, Integer, Text
from sqlmodel import Field, SQLModel


class Task(SQLModel, table=True):
    __tablename__ = "tasks"
    # never hand out an id that belonged to a deleted task
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(sa_column=Column("title", Text, nullable=False))
    # 0/1 on disk, exposed as bool by TaskRead
    is_completed: int = Field(
        default=0,
        sa_column=Column("isCompleted", Integer, nullable=False, default=0, server_default="0"),
    )
    created_date: str = Field(sa_column=Column("createdDate", Text, nullable=False))
