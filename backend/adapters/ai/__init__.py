# AI Adapters
# OpenAI, Anthropic and Gemini integrations

from .campaign_ai_service import (
    BrandVoice,
    CampaignAIService,
    CampaignRequest,
    campaign_ai_service,
)
from .providers import (
    MODEL_REGISTRY,
    SUPPORTED_MODELS,
    AIProvider,
    AnthropicProvider,
    GeminiProvider,
    OpenAIProvider,
    resolve_model,
)

__all__ = [
    "AIProvider",
    "AnthropicProvider",
    "BrandVoice",
    "CampaignAIService",
    "CampaignRequest",
    "GeminiProvider",
    "MODEL_REGISTRY",
    "OpenAIProvider",
    "SUPPORTED_MODELS",
    "campaign_ai_service",
    "resolve_model",
]
