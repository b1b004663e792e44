"""
Prompt template lookup, interpolation and caching.
"""

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config.settings import settings
from infrastructure.database.models.prompt import Prompt, PromptStatus
from services.prompt_catalog import PROMPT_DEFINITIONS

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


@dataclass(frozen=True)
class RenderedPrompt:
    """A template with its variables substituted, ready to send."""

    key: str
    text: str
    system_message: Optional[str] = None
    from_fallback: bool = False


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(_stringify(v) for v in value)
    return str(value)


def render_template(template: str, variables: dict[str, Any]) -> str:
    """
    Replace ``{{name}}`` placeholders with values from ``variables``.

    Lists are joined with ", " and None renders as an empty string.
    Placeholders without a matching variable are left untouched.
    """

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name not in variables:
            return match.group(0)
        return _stringify(variables[name])

    return _PLACEHOLDER_RE.sub(_replace, template)


class PromptCache:
    """
    Process-local TTL cache of rendered prompts.

    Expiry is checked lazily on read; there is no eviction beyond that.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[RenderedPrompt, float]] = {}

    @staticmethod
    def make_key(key: str, variables: dict[str, Any]) -> str:
        return f"{key}:{json.dumps(variables, sort_keys=True, default=str)}"

    def get(self, cache_key: str) -> Optional[RenderedPrompt]:
        entry = self._entries.get(cache_key)
        if entry is None:
            return None
        prompt, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[cache_key]
            return None
        return prompt

    def set(self, cache_key: str, prompt: RenderedPrompt) -> None:
        self._entries[cache_key] = (prompt, self._clock() + self.ttl_seconds)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


prompt_cache = PromptCache(ttl_seconds=settings.prompt_cache_ttl_seconds)


class PromptService:
    """Resolves prompt templates from the database, falling back to built-ins."""

    def __init__(self, db: AsyncSession, cache: Optional[PromptCache] = None):
        self.db = db
        self.cache = cache if cache is not None else prompt_cache

    async def _load_template(self, key: str) -> Optional[Prompt]:
        result = await self.db.execute(
            select(Prompt).where(
                Prompt.prompt_key == key,
                Prompt.status == PromptStatus.ACTIVE.value,
            )
        )
        return result.scalar_one_or_none()

    async def get_prompt(
        self,
        key: str,
        variables: dict[str, Any],
        fallback: Optional[str] = None,
    ) -> RenderedPrompt:
        """
        Return the rendered prompt for ``key``.

        A cached rendering is returned when the same key and variables were
        requested within the TTL. Otherwise the active stored template is
        used; when it is missing or blank the fallback (or the built-in
        definition for the key) is used verbatim as the template.
        """
        cache_key = PromptCache.make_key(key, variables)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        stored = await self._load_template(key)
        definition = PROMPT_DEFINITIONS.get(key)

        if stored is not None and stored.prompt_text and stored.prompt_text.strip():
            template = stored.prompt_text
            system_message = stored.system_message or (
                definition.system_message if definition else None
            )
            from_fallback = False
        else:
            if fallback is None and definition is None:
                raise KeyError(f"No prompt template or fallback for key '{key}'")
            logger.info("Using fallback template for prompt '%s'", key)
            template = fallback if fallback is not None else definition.prompt_text
            system_message = definition.system_message if definition else None
            from_fallback = True

        rendered = RenderedPrompt(
            key=key,
            text=render_template(template, variables),
            system_message=system_message,
            from_fallback=from_fallback,
        )
        self.cache.set(cache_key, rendered)
        return rendered
