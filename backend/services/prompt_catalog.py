"""
Built-in prompt templates.

These serve two purposes: they seed the ``prompts`` table on first start,
and they are the fallback used verbatim whenever a stored template is
missing or blank.
"""

from dataclasses import dataclass, field
from typing import Optional

CAMPAIGN_GENERATE = "campaign_generate"
CAMPAIGN_EVALUATE = "campaign_evaluate"
CAMPAIGN_REWRITE = "campaign_rewrite"
STORY_SUMMARY = "story_summary"
CAMPAIGN_PLAN = "campaign_plan"
RAPID_RESPONSE = "quickstart_rapid_response"
SEGMENT_REWRITE = "quickstart_segment_rewrite"
SUBJECT_LINES = "quickstart_subject_lines"
CTA_BUTTONS = "quickstart_cta_buttons"
GROUNDING_LIBRARY = "quickstart_grounding_library"
EMAIL_OPTIMIZER = "email_optimizer"


@dataclass(frozen=True)
class PromptDefinition:
    key: str
    name: str
    description: str
    prompt_text: str
    system_message: Optional[str] = None
    variables: list[str] = field(default_factory=list)
    model: str = "gpt-4o"


_WRITER_SYSTEM = (
    "You are an expert marketing campaign writer for nonprofit newsrooms. "
    "Always respond with valid JSON."
)

_GENERATE_TEXT = """You are an expert marketing campaign writer for nonprofit newsrooms. Generate a {{campaign_type}} campaign with the following requirements:

Campaign Type: {{campaign_type}}
Primary Objective: {{objective}}
Context: {{context}}
Organization Name: {{newsroom_name}}

IMPORTANT: Use "{{newsroom_name}}" as the organization name throughout the campaign content. Do not use any other organization names.

Brand Voice & Tone:
- Tone: {{tone}}
- Voice: {{voice}}
- Key Messages: {{key_messages}}
- Guidelines: {{guidelines}}

Target Audience Segments: {{segments}}

Reference Materials:
{{reference_materials}}

Requirements:
1. Create compelling {{content_requirements}} content
2. Focus on {{objective_focus}}
3. Include a strong call-to-action
4. Maintain the specified brand voice and tone
5. Provide 3-4 AI insights about the campaign effectiveness
6. Estimate performance metrics (open rate, click rate, conversion rate as percentages)

Response must be in JSON format with these fields:
- subject (if email campaign, at most 50 characters)
- preview_text (if email campaign, at most 90 characters)
- content (main campaign text)
- cta (call-to-action text)
- insights (array of 3-4 strings)
- metrics (object with estimated_open_rate, estimated_click_rate, estimated_conversion as numbers)"""

_EVALUATE_TEXT = """Evaluate the following {{campaign_type}} campaign for {{newsroom_name}} using the {{framework_name}} framework.

Framework criteria:
{{framework_criteria}}

Campaign content:
\"\"\"
{{campaign_content}}
\"\"\"

Score each criterion from 0 to 100, give an overall score from 0 to 100, and list concrete, actionable recommendations.

Respond in JSON format:
{
    "overall_score": 78,
    "category_scores": {"criterion": 80},
    "recommendations": ["..."]
}"""

_REWRITE_TEXT = """Rewrite the following {{campaign_type}} campaign for {{newsroom_name}}, applying every recommendation below while keeping the facts, offers and links intact.

Recommendations:
{{recommendations}}

Original campaign:
\"\"\"
{{original_content}}
\"\"\"

Respond in JSON format:
{
    "rewritten_content": "..."
}"""

_SUMMARY_TEXT = """Summarize the following news story for use in fundraising and membership campaigns by {{newsroom_name}}. Keep it to 2-3 sentences, emphasize community impact, and stay factual.

Title: {{title}}

Story:
\"\"\"
{{original_text}}
\"\"\"

Respond in JSON format:
{
    "summary": "..."
}"""

_PLAN_TEXT = """Write a campaign plan for {{newsroom_name}}.

Plan title: {{title}}
Organization profile: {{organization_profile}}
Brand voice: {{brand_voice}}
Campaign goal: {{campaign_goal}}
Total goal: {{total_goal}}
Timeframe: {{timeframe_type}} from {{start_date}} to {{end_date}}
Audience notes: {{audience_notes}}
Key stories to feature: {{key_stories}}
Match or challenge details: {{match_details}}
Constraints: {{constraints}}
Tools and channels: {{tools}}

Write the plan in markdown with these sections, in order:
1. Strategy summary
2. Audience and segments
3. Messaging pillars
4. Phases, dates, and touchplan
5. Success metrics

In the "Phases, dates, and touchplan" section list every phase as a top-level bullet with its date range in parentheses, and every email as a nested bullet in exactly this form:
- Launch (Mar 3 - Mar 9)
  - March 3 (Monday): Announce the campaign with the lead story

Respond in JSON format:
{
    "plan": "...markdown..."
}"""

_RAPID_RESPONSE_TEXT = """Breaking news for {{newsroom_name}}: "{{headline}}"
Urgency: {{urgency}}

Write a rapid-response {{campaign_type}} campaign that connects this story to reader support for {{newsroom_name}}. Focus on {{objective_focus}} and match the urgency level: critical and high urgency call for short, immediate copy; medium and low urgency can carry more context.

Brand Voice & Tone:
- Tone: {{tone}}
- Voice: {{voice}}
- Key Messages: {{key_messages}}
- Guidelines: {{guidelines}}

Response must be in JSON format with these fields:
- subject (at most 50 characters)
- preview_text (at most 90 characters)
- content (main campaign text)
- cta (call-to-action text)
- insights (array of 3-4 strings)
- metrics (object with estimated_open_rate, estimated_click_rate, estimated_conversion as numbers)"""

_SEGMENT_REWRITE_TEXT = """Adapt the following {{campaign_type}} campaign from {{newsroom_name}} for one audience segment. Keep the facts, offers and links; change framing, examples and tone so it speaks directly to this segment.

Segment: {{segment_name}}
Segment description: {{segment_description}}

Original campaign:
\"\"\"
{{original_content}}
\"\"\"

Response must be in JSON format with these fields:
- subject (if email campaign, at most 50 characters)
- preview_text (if email campaign, at most 90 characters)
- content (main campaign text)
- cta (call-to-action text)
- insights (array of 2-3 strings explaining the adaptation)"""

_SUBJECT_LINES_TEXT = """Suggest {{count}} email subject lines for a {{campaign_type}} campaign by {{newsroom_name}} focused on {{objective_focus}}.

Campaign context: {{context}}
Tone: {{tone}}
Voice: {{voice}}

Each subject line must be at most 50 characters, specific and free of spam trigger words. Vary the approach: curiosity, urgency, local pride, direct benefit.

Respond in JSON format:
{
    "subject_lines": ["..."]
}"""

_CTA_BUTTONS_TEXT = """Suggest {{count}} call-to-action button labels for a {{campaign_type}} campaign by {{newsroom_name}} focused on {{objective_focus}}.

Campaign context: {{context}}
Tone: {{tone}}
Voice: {{voice}}

Each label must be 2-5 words, start with a verb and make the next step obvious.

Respond in JSON format:
{
    "cta_buttons": ["..."]
}"""

_GROUNDING_LIBRARY_TEXT = """Build brand guidelines for {{newsroom_name}} from the material below.

About the newsroom:
{{newsroom_info}}

Existing content samples:
\"\"\"
{{existing_content}}
\"\"\"

Describe the brand the way an editor would brief a new copywriter.

Respond in JSON format:
{
    "name": "short name for these guidelines",
    "tone": "...",
    "voice": "...",
    "key_messages": ["..."],
    "guidelines": "..."
}"""

_EMAIL_OPTIMIZER_TEXT = """Write 5 optimized {{content_label}} options for an email from {{newsroom_name}}.

Campaign context: {{campaign_context}}
Target audience: {{target_audience}}
Main goal: {{main_goal}}
Current text: {{existing_text}}
Tone: {{tone}}
Voice: {{voice}}

Length limits: subject lines at most 50 characters, preheaders at most 90 characters, button text 2-5 words.
For each option give the text, one sentence of reasoning, a predicted effectiveness score from 0 to 100, and a short category label such as "urgency", "curiosity" or "benefit".

Respond in JSON format:
{
    "options": [
        {"text": "...", "reasoning": "...", "score": 85, "category": "..."}
    ]
}"""


PROMPT_DEFINITIONS: dict[str, PromptDefinition] = {
    CAMPAIGN_GENERATE: PromptDefinition(
        key=CAMPAIGN_GENERATE,
        name="Campaign Generation",
        description="Generates email, social or web campaign copy from brand guidelines.",
        prompt_text=_GENERATE_TEXT,
        system_message=_WRITER_SYSTEM,
        variables=[
            "campaign_type", "objective", "objective_focus", "context", "newsroom_name",
            "tone", "voice", "key_messages", "guidelines", "segments",
            "reference_materials", "content_requirements",
        ],
    ),
    CAMPAIGN_EVALUATE: PromptDefinition(
        key=CAMPAIGN_EVALUATE,
        name="Campaign Evaluation",
        description="Scores campaign copy against an evaluation framework.",
        prompt_text=_EVALUATE_TEXT,
        system_message=(
            "You are a senior audience-revenue strategist who reviews newsroom "
            "marketing copy. Always respond with valid JSON."
        ),
        variables=[
            "campaign_type", "newsroom_name", "framework_name",
            "framework_criteria", "campaign_content",
        ],
    ),
    CAMPAIGN_REWRITE: PromptDefinition(
        key=CAMPAIGN_REWRITE,
        name="Campaign Rewrite",
        description="Rewrites campaign copy applying evaluation recommendations.",
        prompt_text=_REWRITE_TEXT,
        system_message=_WRITER_SYSTEM,
        variables=["campaign_type", "newsroom_name", "recommendations", "original_content"],
    ),
    STORY_SUMMARY: PromptDefinition(
        key=STORY_SUMMARY,
        name="Story Summary",
        description="Condenses a published story into campaign-ready context.",
        prompt_text=_SUMMARY_TEXT,
        system_message=(
            "You are a newsroom editor writing concise story summaries. "
            "Always respond with valid JSON."
        ),
        variables=["newsroom_name", "title", "original_text"],
    ),
    CAMPAIGN_PLAN: PromptDefinition(
        key=CAMPAIGN_PLAN,
        name="Campaign Plan",
        description="Writes a phased, dated campaign plan with an email touchplan.",
        prompt_text=_PLAN_TEXT,
        system_message=(
            "You are a reader-revenue strategist who plans fundraising and membership "
            "campaigns for local newsrooms. Always respond with valid JSON."
        ),
        variables=[
            "newsroom_name", "title", "organization_profile", "brand_voice",
            "campaign_goal", "total_goal", "timeframe_type", "start_date", "end_date",
            "audience_notes", "key_stories", "match_details", "constraints", "tools",
        ],
    ),
    RAPID_RESPONSE: PromptDefinition(
        key=RAPID_RESPONSE,
        name="Rapid-Response Campaign",
        description="Turns a breaking headline into a ready-to-send campaign.",
        prompt_text=_RAPID_RESPONSE_TEXT,
        system_message=_WRITER_SYSTEM,
        variables=[
            "newsroom_name", "headline", "urgency", "campaign_type", "objective_focus",
            "tone", "voice", "key_messages", "guidelines",
        ],
    ),
    SEGMENT_REWRITE: PromptDefinition(
        key=SEGMENT_REWRITE,
        name="Segment Rewrite",
        description="Adapts an existing campaign for one audience segment.",
        prompt_text=_SEGMENT_REWRITE_TEXT,
        system_message=_WRITER_SYSTEM,
        variables=[
            "campaign_type", "newsroom_name", "segment_name", "segment_description",
            "original_content",
        ],
    ),
    SUBJECT_LINES: PromptDefinition(
        key=SUBJECT_LINES,
        name="Subject Line Suggestions",
        description="Suggests email subject lines.",
        prompt_text=_SUBJECT_LINES_TEXT,
        system_message=_WRITER_SYSTEM,
        variables=[
            "count", "campaign_type", "newsroom_name", "objective_focus", "context",
            "tone", "voice",
        ],
    ),
    CTA_BUTTONS: PromptDefinition(
        key=CTA_BUTTONS,
        name="Button CTA Suggestions",
        description="Suggests call-to-action button labels.",
        prompt_text=_CTA_BUTTONS_TEXT,
        system_message=_WRITER_SYSTEM,
        variables=[
            "count", "campaign_type", "newsroom_name", "objective_focus", "context",
            "tone", "voice",
        ],
    ),
    GROUNDING_LIBRARY: PromptDefinition(
        key=GROUNDING_LIBRARY,
        name="Grounding Library Builder",
        description="Drafts brand guidelines from a newsroom description and sample content.",
        prompt_text=_GROUNDING_LIBRARY_TEXT,
        system_message=(
            "You are a brand strategist for local news organizations. "
            "Always respond with valid JSON."
        ),
        variables=["newsroom_name", "newsroom_info", "existing_content"],
    ),
    EMAIL_OPTIMIZER: PromptDefinition(
        key=EMAIL_OPTIMIZER,
        name="Email Optimizer",
        description="Scores and suggests subject lines, preheaders or button text.",
        prompt_text=_EMAIL_OPTIMIZER_TEXT,
        system_message=_WRITER_SYSTEM,
        variables=[
            "content_label", "newsroom_name", "campaign_context", "target_audience",
            "main_goal", "existing_text", "tone", "voice",
        ],
    ),
}

# Category name -> (description, prompt keys)
PROMPT_CATEGORIES: dict[str, tuple[str, list[str]]] = {
    "Campaign Creation": (
        "Prompts that write new campaign copy.",
        [CAMPAIGN_GENERATE, CAMPAIGN_REWRITE, RAPID_RESPONSE, SEGMENT_REWRITE],
    ),
    "Campaign Analysis": (
        "Prompts that review and score campaign copy.",
        [CAMPAIGN_EVALUATE],
    ),
    "Campaign Planning": (
        "Prompts that lay out multi-week campaign plans.",
        [CAMPAIGN_PLAN],
    ),
    "Content Tools": (
        "Supporting prompts for newsroom content.",
        [STORY_SUMMARY, SUBJECT_LINES, CTA_BUTTONS, GROUNDING_LIBRARY, EMAIL_OPTIMIZER],
    ),
}

# Evaluation rubrics
EVALUATION_FRAMEWORKS: dict[str, tuple[str, list[str]]] = {
    "bluelena": (
        "Bluelena Best Practices",
        [
            "subject_line: clear, specific and under 50 characters",
            "personalization: speaks to the reader and their community",
            "storytelling: grounded in a concrete story or impact",
            "call_to_action: single, prominent and specific",
            "urgency: gives a reason to act now",
            "mission_alignment: reflects the newsroom's public-service mission",
        ],
    ),
    "audience_value_prop": (
        "Audience Value Proposition",
        [
            "relevance: addresses what this audience cares about",
            "unique_value: explains what only this newsroom provides",
            "benefit_clarity: states what the supporter gets",
            "trust: builds credibility and transparency",
            "emotional_connection: connects to local identity and values",
        ],
    ),
}

OBJECTIVE_FOCUS = {
    "subscription": "driving subscriptions",
    "donation": "encouraging donations",
    "membership": "growing membership",
    "engagement": "boosting engagement",
}

# Email optimizer content type -> label used in the prompt
OPTIMIZER_CONTENT_TYPES = {
    "subject_line": "subject line",
    "preheader": "preheader text",
    "button_text": "button text",
}

# Campaign planner form fields passed through to the plan prompt
PLAN_INPUT_FIELDS = (
    "organization_profile",
    "brand_voice",
    "campaign_goal",
    "total_goal",
    "timeframe_type",
    "start_date",
    "end_date",
    "audience_notes",
    "key_stories",
    "match_details",
    "constraints",
    "tools",
)
