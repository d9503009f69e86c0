"""Forum model."""

from sqlmodel import Field, SQLModel

from .base import UUIDMixin


class Forum(UUIDMixin, SQLModel, table=True):
    __tablename__ = "forums"

    title: str = Field(nullable=False, unique=True)
    description: str = Field(default="", nullable=False)
