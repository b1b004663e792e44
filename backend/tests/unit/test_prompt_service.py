"""
Tests for prompt template rendering, caching and fallback.
"""

from unittest.mock import patch

import pytest

from infrastructure.database.models import Prompt
from services.prompt_catalog import CAMPAIGN_GENERATE, PROMPT_DEFINITIONS
from services.prompt_service import PromptCache, PromptService, RenderedPrompt, render_template


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestRenderTemplate:
    def test_substitutes_variables(self):
        assert render_template("Hi {{name}}!", {"name": "Ada"}) == "Hi Ada!"

    def test_tolerates_whitespace_in_placeholder(self):
        assert render_template("{{ name }}", {"name": "Ada"}) == "Ada"

    def test_lists_are_joined(self):
        assert render_template("{{items}}", {"items": ["a", "b"]}) == "a, b"

    def test_none_renders_empty(self):
        assert render_template("[{{x}}]", {"x": None}) == "[]"

    def test_unknown_placeholder_kept(self):
        assert render_template("{{missing}}", {}) == "{{missing}}"


class TestPromptCache:
    def test_hit_within_ttl(self):
        clock = FakeClock()
        cache = PromptCache(ttl_seconds=300, clock=clock)
        prompt = RenderedPrompt(key="k", text="t")
        cache.set("k:{}", prompt)

        clock.now += 299
        assert cache.get("k:{}") is prompt

    def test_expires_after_ttl(self):
        clock = FakeClock()
        cache = PromptCache(ttl_seconds=300, clock=clock)
        cache.set("k:{}", RenderedPrompt(key="k", text="t"))

        clock.now += 300
        assert cache.get("k:{}") is None
        assert len(cache) == 0

    def test_key_ignores_variable_order(self):
        assert PromptCache.make_key("k", {"a": 1, "b": 2}) == PromptCache.make_key(
            "k", {"b": 2, "a": 1}
        )

    def test_clear(self):
        cache = PromptCache()
        cache.set("a", RenderedPrompt(key="a", text="t"))
        cache.clear()
        assert len(cache) == 0


class TestPromptService:
    @pytest.fixture
    def cache(self):
        return PromptCache(ttl_seconds=300, clock=FakeClock())

    async def test_uses_stored_template(self, db_session, cache):
        db_session.add(
            Prompt(
                name="Generate",
                prompt_key=CAMPAIGN_GENERATE,
                prompt_text="Write for {{newsroom_name}}",
                system_message="Be brief.",
            )
        )
        await db_session.commit()

        prompt = await PromptService(db_session, cache).get_prompt(
            CAMPAIGN_GENERATE, {"newsroom_name": "Ledger"}
        )

        assert prompt.text == "Write for Ledger"
        assert prompt.system_message == "Be brief."
        assert prompt.from_fallback is False

    async def test_missing_template_uses_builtin(self, db_session, cache):
        prompt = await PromptService(db_session, cache).get_prompt(CAMPAIGN_GENERATE, {})

        assert prompt.from_fallback is True
        assert prompt.text == PROMPT_DEFINITIONS[CAMPAIGN_GENERATE].prompt_text
        assert prompt.text.strip()

    async def test_blank_template_uses_explicit_fallback(self, db_session, cache):
        db_session.add(Prompt(name="Blank", prompt_key="custom", prompt_text="   "))
        await db_session.commit()

        prompt = await PromptService(db_session, cache).get_prompt(
            "custom", {"x": "1"}, fallback="Fallback {{x}}"
        )

        assert prompt.text == "Fallback 1"
        assert prompt.from_fallback is True

    async def test_inactive_template_is_ignored(self, db_session, cache):
        db_session.add(
            Prompt(
                name="Old",
                prompt_key=CAMPAIGN_GENERATE,
                prompt_text="Retired template",
                status="inactive",
            )
        )
        await db_session.commit()

        prompt = await PromptService(db_session, cache).get_prompt(CAMPAIGN_GENERATE, {})
        assert prompt.from_fallback is True

    async def test_unknown_key_without_fallback_raises(self, db_session, cache):
        with pytest.raises(KeyError):
            await PromptService(db_session, cache).get_prompt("nope", {})

    async def test_second_lookup_served_from_cache(self, db_session, cache):
        service = PromptService(db_session, cache)
        variables = {"newsroom_name": "Ledger"}

        first = await service.get_prompt(CAMPAIGN_GENERATE, variables)
        with patch.object(service, "_load_template") as load:
            second = await service.get_prompt(CAMPAIGN_GENERATE, variables)

        load.assert_not_called()
        assert second is first

    async def test_different_variables_miss_cache(self, db_session, cache):
        service = PromptService(db_session, cache)
        await service.get_prompt(CAMPAIGN_GENERATE, {"newsroom_name": "A"})
        await service.get_prompt(CAMPAIGN_GENERATE, {"newsroom_name": "B"})
        assert len(cache) == 2
