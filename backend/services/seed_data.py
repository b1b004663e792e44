"""
First-start seed data: campaign templates and prompt catalog.

Both seeders are idempotent and only insert what is missing.
"""

import logging

from services.campaign_storage import CampaignStorage
from services.prompt_catalog import PROMPT_CATEGORIES, PROMPT_DEFINITIONS

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES = [
    {
        "name": "Breaking News Alert",
        "description": "Rapid-response template for urgent news coverage with donation CTA",
        "type": "email",
        "icon": "fas fa-bolt",
        "setup_time": "2-3 min setup",
        "template": {
            "subject": "Breaking: {{headline}}",
            "structure": "urgent_news",
            "cta": "donation",
        },
    },
    {
        "name": "Monthly Supporter Drive",
        "description": "Convert one-time donors to recurring supporters with impact stories",
        "type": "email",
        "icon": "fas fa-heart",
        "setup_time": "5-7 min setup",
        "template": {
            "subject": "Your support makes a difference",
            "structure": "impact_story",
            "cta": "monthly_subscription",
        },
    },
    {
        "name": "Social Engagement",
        "description": "Multi-platform social campaign to drive website traffic and subscriptions",
        "type": "social",
        "icon": "fas fa-share-alt",
        "setup_time": "3-4 min setup",
        "template": {
            "platforms": ["facebook", "twitter", "instagram"],
            "structure": "engagement",
            "cta": "subscribe",
        },
    },
]


async def seed_campaign_templates(storage: CampaignStorage) -> int:
    """Insert the default templates when the table is empty. Returns rows added."""
    if await storage.count_campaign_templates() > 0:
        return 0
    for template in DEFAULT_TEMPLATES:
        await storage.create_campaign_template(**template)
    logger.info("Seeded %d campaign templates", len(DEFAULT_TEMPLATES))
    return len(DEFAULT_TEMPLATES)


async def seed_prompts(storage: CampaignStorage) -> int:
    """Insert missing prompt categories and prompts. Returns prompts added."""
    added = 0
    for category_name, (description, keys) in PROMPT_CATEGORIES.items():
        category = await storage.get_prompt_category_by_name(category_name)
        if category is None:
            category = await storage.create_prompt_category(
                name=category_name, description=description
            )
            logger.info("Created prompt category: %s", category_name)

        for key in keys:
            if await storage.get_prompt_by_key(key) is not None:
                continue
            definition = PROMPT_DEFINITIONS[key]
            await storage.create_prompt(
                category_id=category.id,
                name=definition.name,
                description=definition.description,
                prompt_key=definition.key,
                prompt_text=definition.prompt_text,
                system_message=definition.system_message,
                variables=list(definition.variables),
                ai_model=definition.model,
                status="active",
                version="1.0",
            )
            added += 1
    if added:
        logger.info("Seeded %d prompts", added)
    return added
