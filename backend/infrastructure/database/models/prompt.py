"""
Editable AI prompt templates.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class PromptStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PromptCategory(Base, TimestampMixin):
    __tablename__ = "prompt_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Prompt(Base, TimestampMixin):
    """A prompt template addressed by ``prompt_key``.

    ``prompt_text`` may contain ``{{variable}}`` placeholders.
    """

    __tablename__ = "prompts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("prompt_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    prompt_key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    prompt_text: Mapped[str] = mapped_column(Text, nullable=False)
    system_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    variables: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)
    ai_model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=PromptStatus.ACTIVE.value, nullable=False
    )
    version: Mapped[str] = mapped_column(String(20), default="1.0", nullable=False)
