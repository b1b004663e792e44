"""
API request/response schemas.
"""

from .admin import (
    AdminCampaignResponse,
    AdminNewsroomResponse,
    AdminUserUpdateRequest,
    AppLogBatch,
    AppLogCreate,
    AppLogResponse,
    CreateAccountRequest,
    CreateAccountResponse,
    NewsroomUpdateRequest,
)
from .audience import (
    SegmentCreate,
    SegmentResponse,
    SegmentUpdate,
    StorySummaryCreate,
    StorySummaryResponse,
)
from .auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    TokenResponse,
    UserResponse,
)
from .campaign import (
    CampaignContent,
    CampaignCreate,
    CampaignResponse,
    CampaignTemplateResponse,
    CampaignUpdate,
    EvaluateCampaignRequest,
    EvaluationResponse,
    GenerateCampaignRequest,
    GenerateCampaignResponse,
    RewriteCampaignRequest,
    RewriteCampaignResponse,
)
from .newsroom import (
    BrandStylesheetCreate,
    BrandStylesheetResponse,
    BrandStylesheetUpdate,
    GroundingMaterials,
    NewsroomResponse,
)
from .plan import (
    CampaignPlanCreate,
    CampaignPlanInputs,
    CampaignPlanResponse,
    NextEmailRequest,
    NextEmailResponse,
    PlanEmailResponse,
)
from .objects import ExtractTextRequest, ExtractTextResponse, UploadUrlRequest, UploadUrlResponse
from .prompt import PromptCategoryResponse, PromptResponse, PromptUpdate
from .quickstart import (
    CtaButtonsResponse,
    EmailOptimizerRequest,
    EmailOptimizerResponse,
    GroundingLibraryRequest,
    RapidResponseRequest,
    SegmentRewriteRequest,
    SubjectLinesResponse,
    SuggestionRequest,
)

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "RefreshTokenRequest",
    "TokenResponse",
    "UserResponse",
    # Newsrooms
    "NewsroomResponse",
    "BrandStylesheetCreate",
    "BrandStylesheetUpdate",
    "BrandStylesheetResponse",
    "GroundingMaterials",
    # Campaigns
    "CampaignContent",
    "CampaignCreate",
    "CampaignUpdate",
    "CampaignResponse",
    "CampaignTemplateResponse",
    "GenerateCampaignRequest",
    "GenerateCampaignResponse",
    "EvaluateCampaignRequest",
    "EvaluationResponse",
    "RewriteCampaignRequest",
    "RewriteCampaignResponse",
    # Campaign plans
    "CampaignPlanCreate",
    "CampaignPlanInputs",
    "CampaignPlanResponse",
    "NextEmailRequest",
    "NextEmailResponse",
    "PlanEmailResponse",
    # Quick start
    "RapidResponseRequest",
    "SegmentRewriteRequest",
    "SuggestionRequest",
    "SubjectLinesResponse",
    "CtaButtonsResponse",
    "GroundingLibraryRequest",
    "EmailOptimizerRequest",
    "EmailOptimizerResponse",
    # Audience
    "SegmentCreate",
    "SegmentUpdate",
    "SegmentResponse",
    "StorySummaryCreate",
    "StorySummaryResponse",
    # Prompts
    "PromptCategoryResponse",
    "PromptResponse",
    "PromptUpdate",
    # Objects
    "UploadUrlRequest",
    "UploadUrlResponse",
    "ExtractTextRequest",
    "ExtractTextResponse",
    # Admin
    "AdminNewsroomResponse",
    "AdminCampaignResponse",
    "NewsroomUpdateRequest",
    "AdminUserUpdateRequest",
    "CreateAccountRequest",
    "CreateAccountResponse",
    "AppLogBatch",
    "AppLogCreate",
    "AppLogResponse",
]
