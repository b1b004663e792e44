"""
Parsing and normalization of JSON answers returned by language models.
"""

import json
import logging
import math
import re
from typing import Any

from core.exceptions import AIResponseParseError

logger = logging.getLogger(__name__)

SUBJECT_MAX_LENGTH = 50
PREVIEW_TEXT_MAX_LENGTH = 90

DEFAULT_OPEN_RATE = 25
DEFAULT_CLICK_RATE = 4
DEFAULT_CONVERSION = 1

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Return the body of the first markdown code fence, or the text unchanged."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_json_response(text: str | None) -> dict[str, Any]:
    """
    Parse a model answer into a JSON object.

    Markdown fences are removed first. If the remainder still does not
    parse, the outermost ``{...}`` block is tried before giving up.

    Raises:
        AIResponseParseError: If no JSON object can be recovered
    """
    if not text or not text.strip():
        raise AIResponseParseError("AI response was empty")

    candidate = strip_code_fences(text)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        match = _OBJECT_RE.search(candidate)
        if not match:
            logger.error("Failed to parse AI response as JSON: %s", text[:500])
            raise AIResponseParseError("Invalid JSON response from AI model")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            logger.error("Failed to parse AI response as JSON: %s", text[:500])
            raise AIResponseParseError("Invalid JSON response from AI model")

    if not isinstance(data, dict):
        logger.error("AI response JSON is not an object: %s", text[:500])
        raise AIResponseParseError("AI response JSON must be an object")
    return data


def _pick(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _number_or(value: Any, default: float) -> float:
    # bool is an int subclass; a True/False "rate" is not a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    return value


def _truncate_subject(subject: str) -> str:
    return subject[:SUBJECT_MAX_LENGTH]


def _truncate_preview(preview: str) -> str:
    if len(preview) <= PREVIEW_TEXT_MAX_LENGTH:
        return preview
    return preview[: PREVIEW_TEXT_MAX_LENGTH - 3] + "..."


def format_campaign_response(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize a generated campaign into the fixed response shape.

    Accepts camelCase or snake_case keys from the model. Subject lines are
    cut to 50 characters and preview text to 90 (87 plus an ellipsis).
    Missing or non-numeric metrics fall back to 25 / 4 / 1.
    """
    metrics = _pick(raw, "metrics") or {}
    if not isinstance(metrics, dict):
        metrics = {}

    subject = _pick(raw, "subject", "subject_line", "subjectLine")
    preview = _pick(raw, "preview_text", "previewText")
    insights = _pick(raw, "insights")

    return {
        "subject": _truncate_subject(str(subject)) if subject is not None else None,
        "preview_text": _truncate_preview(str(preview)) if preview is not None else None,
        "content": str(_pick(raw, "content", "body") or ""),
        "cta": str(_pick(raw, "cta", "call_to_action", "callToAction") or ""),
        "insights": [str(i) for i in insights] if isinstance(insights, list) else [],
        "metrics": {
            "estimated_open_rate": _number_or(
                _pick(metrics, "estimated_open_rate", "estimatedOpenRate"), DEFAULT_OPEN_RATE
            ),
            "estimated_click_rate": _number_or(
                _pick(metrics, "estimated_click_rate", "estimatedClickRate"), DEFAULT_CLICK_RATE
            ),
            "estimated_conversion": _number_or(
                _pick(metrics, "estimated_conversion", "estimatedConversion"), DEFAULT_CONVERSION
            ),
        },
    }


def _clamp_score(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # json.loads accepts NaN and Infinity
    if not math.isfinite(value):
        return None
    return int(max(0, min(100, round(value))))


def format_evaluation_response(raw: dict[str, Any]) -> dict[str, Any]:
    """Normalize a rubric evaluation: scores clamped to 0-100, junk entries dropped."""
    scores = _pick(raw, "category_scores", "categoryScores") or {}
    category_scores = {}
    if isinstance(scores, dict):
        for name, value in scores.items():
            clamped = _clamp_score(value)
            if clamped is not None:
                category_scores[str(name)] = clamped

    recommendations = _pick(raw, "recommendations")
    overall = _clamp_score(_pick(raw, "overall_score", "overallScore"))

    return {
        "overall_score": overall if overall is not None else 0,
        "category_scores": category_scores,
        "recommendations": (
            [str(r) for r in recommendations] if isinstance(recommendations, list) else []
        ),
    }


def format_suggestions(
    raw: dict[str, Any],
    keys: tuple[str, ...],
    count: int,
    max_length: int | None = None,
) -> list[str]:
    """
    Normalize a list of short suggestions (subject lines, button labels).

    Blank and repeated entries are dropped, each entry is cut to
    ``max_length`` and at most ``count`` are returned.
    """
    items = _pick(raw, *keys)
    if not isinstance(items, list):
        return []

    seen = set()
    suggestions = []
    for item in items:
        if not isinstance(item, (str, int, float)) or isinstance(item, bool):
            continue
        text = str(item).strip()
        if max_length is not None:
            text = text[:max_length].rstrip()
        if not text or text.lower() in seen:
            continue
        seen.add(text.lower())
        suggestions.append(text)
        if len(suggestions) == count:
            break
    return suggestions


def format_brand_profile(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize drafted brand guidelines.

    Raises:
        AIResponseParseError: If tone or voice is missing
    """
    tone = str(_pick(raw, "tone") or "").strip()
    voice = str(_pick(raw, "voice") or "").strip()
    if not tone or not voice:
        raise AIResponseParseError("AI response is missing tone or voice")

    messages = _pick(raw, "key_messages", "keyMessages")
    return {
        "name": str(_pick(raw, "name") or "").strip()[:255] or None,
        "tone": tone,
        "voice": voice,
        "key_messages": (
            [str(m).strip() for m in messages if str(m).strip()]
            if isinstance(messages, list)
            else []
        ),
        "guidelines": str(_pick(raw, "guidelines") or "").strip() or None,
    }


def format_optimizer_options(raw: dict[str, Any]) -> list[dict[str, Any]]:
    """Normalize email optimizer options, best score first; entries without text are dropped."""
    options = _pick(raw, "options")
    if not isinstance(options, list):
        return []

    normalized = []
    for option in options:
        if not isinstance(option, dict):
            continue
        text = str(_pick(option, "text") or "").strip()
        if not text:
            continue
        score = _clamp_score(_pick(option, "score"))
        normalized.append(
            {
                "text": text,
                "reasoning": str(_pick(option, "reasoning") or ""),
                "score": score if score is not None else 0,
                "category": str(_pick(option, "category") or "general"),
            }
        )
    normalized.sort(key=lambda o: o["score"], reverse=True)
    return normalized


def format_plan_response(raw: dict[str, Any]) -> str:
    """
    Extract the markdown plan.

    Raises:
        AIResponseParseError: If the answer holds no plan text
    """
    plan = _pick(raw, "plan", "generated_plan", "generatedPlan", "content")
    if not isinstance(plan, str) or not plan.strip():
        raise AIResponseParseError("AI response did not include a campaign plan")
    return plan.strip()
