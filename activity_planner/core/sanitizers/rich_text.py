"""
Rich-text sanitizers for fields that may carry a small HTML subset.

Two interchangeable implementations share one contract,
``sanitize_rich_text(value) -> str``:

- AllowListHtmlSanitizer keeps <b>, <i>, <em>, <strong>, <span> and <br>
  without attributes and drops every other tag.
- EscapingHtmlSanitizer treats the input as plain text and escapes it.

The implementation is chosen once at startup by build_rich_text_sanitizer().
"""

import html
from abc import abstractmethod
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

from activity_planner.observability.logger import get_logger

from .base_sanitizer import BaseSanitizer

logger = get_logger(__name__)

ALLOWED_TAGS = frozenset({"b", "i", "em", "strong", "span", "br"})
# Content of these elements is dropped together with the tags.
DROP_CONTENT_TAGS = frozenset({"script", "style", "iframe", "object", "template", "noscript"})

RICH_TEXT_MODES = ("allowlist", "escape")


class RichTextSanitizer(BaseSanitizer):
    """Sanitizing capability for rich-text fields."""

    @abstractmethod
    def sanitize_rich_text(self, value: str) -> str:
        pass

    def sanitize(self, value: Any) -> str:
        if self.is_blank(value):
            return ""
        return self.sanitize_rich_text(str(value))


class AllowListHtmlSanitizer(RichTextSanitizer):
    """Keeps an allow-listed set of formatting tags; strips everything else."""

    def sanitize_rich_text(self, value: str) -> str:
        soup = BeautifulSoup(value, "html.parser")

        # Comments, doctypes and CDATA sections never survive.
        for node in soup.find_all(string=lambda text: isinstance(text, PreformattedString)):
            node.extract()

        for tag in soup.find_all(list(DROP_CONTENT_TAGS)):
            if not tag.decomposed:
                tag.decompose()

        for tag in soup.find_all(True):
            if tag.name in ALLOWED_TAGS:
                tag.attrs = {}
            else:
                tag.unwrap()

        return soup.decode(formatter="minimal")

    @property
    def sanitizer_type(self) -> str:
        return "richtext_allowlist"


class EscapingHtmlSanitizer(RichTextSanitizer):
    """Plain-text fallback: every character is escaped, no markup survives."""

    def sanitize_rich_text(self, value: str) -> str:
        return html.escape(value)

    @property
    def sanitizer_type(self) -> str:
        return "richtext_escape"


def build_rich_text_sanitizer(mode: str = "allowlist") -> RichTextSanitizer:
    """
    Select the rich-text sanitizer implementation.

    Args:
        mode: "allowlist" or "escape"; unknown modes fall back to escaping

    Returns:
        RichTextSanitizer instance
    """
    normalized = (mode or "").strip().lower()
    if normalized == "allowlist":
        return AllowListHtmlSanitizer()
    if normalized != "escape":
        logger.warning(
            f"Unknown rich-text sanitizer mode '{mode}', using escaping fallback",
            extra={"mode": mode},
        )
    return EscapingHtmlSanitizer()
