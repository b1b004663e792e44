"""
Audience segment and story summary models.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Segment(Base, TimestampMixin):
    """Named audience segment used to target campaigns."""

    __tablename__ = "segments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    newsroom_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("newsrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class StorySummary(Base, TimestampMixin):
    """Short summary of a published story, reused as campaign context."""

    __tablename__ = "story_summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    newsroom_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("newsrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    original_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    original_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
