"""
Assembles Grounding Library material into prompt context.
"""

import logging
from typing import Any, Optional

from infrastructure.database.models.newsroom import MATERIAL_CATEGORIES, BrandStylesheet
from services.file_extractor import FileExtractor

logger = logging.getLogger(__name__)

# Per-document cap so one long upload cannot crowd out the rest of the prompt
MAX_DOCUMENT_CHARS = 8000


def _label(slot: str) -> str:
    return slot.replace("_", " ").title()


def iter_material_entries(materials: Optional[dict[str, Any]]):
    """Yield ``(slot, text, file_url)`` for every populated material slot."""
    materials = materials or {}
    for category, slots in MATERIAL_CATEGORIES.items():
        section = materials.get(category) or {}
        for slot in slots:
            entry = section.get(slot) or {}
            text = (entry.get("text") or "").strip()
            file_url = (entry.get("file_url") or "").strip()
            if text or file_url:
                yield slot, text, file_url


async def build_reference_materials(
    stylesheet: Optional[BrandStylesheet],
    extractor: FileExtractor,
) -> str:
    """
    Render a stylesheet's materials as labelled text blocks.

    Attached files are extracted concurrently; extraction failures show up
    as placeholder lines rather than errors.
    """
    if stylesheet is None:
        return ""

    entries = list(iter_material_entries(stylesheet.materials))
    if not entries:
        return ""

    extracted = await extractor.extract_text_from_files([url for _, _, url in entries if url])

    blocks = []
    for slot, text, file_url in entries:
        parts = []
        if text:
            parts.append(text)
        if file_url and extracted.get(file_url):
            parts.append(extracted[file_url][:MAX_DOCUMENT_CHARS])
        if parts:
            blocks.append(f"## {_label(slot)}\n" + "\n\n".join(parts))

    logger.debug(
        "Built reference materials for stylesheet %s (%d blocks)", stylesheet.id, len(blocks)
    )
    return "\n\n".join(blocks)
