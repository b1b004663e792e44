"""
Text extraction from uploaded grounding documents.

Supports PDF, DOCX, HTML and plain text. Extraction never raises:
failures are reported inline as a placeholder string so a broken
attachment does not block campaign generation.
"""

import asyncio
import io
import logging
from enum import StrEnum
from typing import Optional

from bs4 import BeautifulSoup
from docx import Document
from pypdf import PdfReader

from adapters.storage.object_storage import ObjectStorageAdapter, storage_adapter

logger = logging.getLogger(__name__)


class FileType(StrEnum):
    PDF = "pdf"
    DOCX = "docx"
    HTML = "html"
    TXT = "txt"
    UNKNOWN = "unknown"


def unreadable_placeholder(file_url: str) -> str:
    return f"[File attached: {file_url} - unable to extract text content]"


def failed_placeholder(file_url: str) -> str:
    return f"[File attached: {file_url} - extraction failed]"


def detect_file_type(file_url: str) -> FileType:
    """Detect the document type from the URL's extension (query string ignored)."""
    path = file_url.split("?", 1)[0].lower()
    if path.endswith(".pdf"):
        return FileType.PDF
    if path.endswith(".docx") or path.endswith(".doc"):
        return FileType.DOCX
    if path.endswith(".html") or path.endswith(".htm"):
        return FileType.HTML
    if path.endswith(".txt"):
        return FileType.TXT
    return FileType.UNKNOWN


def extract_pdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    text_parts = []
    for page in reader.pages:
        text = page.extract_text()
        if text:
            text_parts.append(text)
    return "\n\n".join(text_parts).strip()


def extract_docx_text(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    paragraphs = [para.text for para in doc.paragraphs if para.text.strip()]
    return "\n\n".join(paragraphs).strip()


def html_to_text(html_content: str) -> str:
    """Strip scripts, styles and markup, collapsing blank lines."""
    soup = BeautifulSoup(html_content, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


class FileExtractor:
    """Reads objects from storage and turns them into prompt-ready text."""

    def __init__(self, storage: Optional[ObjectStorageAdapter] = None):
        self.storage = storage or storage_adapter

    async def extract_text_from_file(self, file_url: str) -> str:
        """
        Extract text from a stored object.

        Returns:
            The extracted text, "" for an empty URL, or a placeholder
            string when the file cannot be read.
        """
        if not file_url:
            return ""

        file_type = detect_file_type(file_url)
        try:
            data = await self.storage.read_object_path(file_url)

            if file_type == FileType.PDF:
                return extract_pdf_text(data)
            if file_type == FileType.DOCX:
                return extract_docx_text(data)
            if file_type == FileType.HTML:
                return html_to_text(data.decode("utf-8", errors="ignore"))
            if file_type == FileType.TXT:
                return data.decode("utf-8", errors="ignore").strip()

            try:
                return data.decode("utf-8").strip()
            except UnicodeDecodeError:
                logger.warning("Could not decode %s as text", file_url)
                return unreadable_placeholder(file_url)
        except Exception as e:
            logger.error("Failed to extract text from %s: %s", file_url, e)
            return failed_placeholder(file_url)

    async def extract_text_from_files(self, file_urls: list[str]) -> dict[str, str]:
        """Extract several files concurrently. Returns ``{url: text}``."""
        unique_urls = list(dict.fromkeys(u for u in file_urls if u))
        texts = await asyncio.gather(*(self.extract_text_from_file(u) for u in unique_urls))
        return dict(zip(unique_urls, texts))


# Singleton instance
file_extractor = FileExtractor()
