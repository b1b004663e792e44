"""
SQLAlchemy database models.
"""

from .app_log import AppLog, LogLevel
from .audience import Segment, StorySummary
from .base import Base, TimestampMixin
from .campaign import (
    Campaign,
    CampaignEvaluation,
    CampaignObjective,
    CampaignPlan,
    CampaignStatus,
    CampaignTemplate,
    CampaignType,
    EvaluationFramework,
)
from .newsroom import MATERIAL_CATEGORIES, BrandStylesheet, Newsroom
from .prompt import Prompt, PromptCategory, PromptStatus
from .user import User, UserRole

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "UserRole",
    "Newsroom",
    "BrandStylesheet",
    "MATERIAL_CATEGORIES",
    "Campaign",
    "CampaignTemplate",
    "CampaignEvaluation",
    "CampaignPlan",
    "CampaignType",
    "CampaignObjective",
    "CampaignStatus",
    "EvaluationFramework",
    "Segment",
    "StorySummary",
    "PromptCategory",
    "Prompt",
    "PromptStatus",
    "AppLog",
    "LogLevel",
]
