# extractors/base_extractor.py
"""
Base extraction utilities with common BeautifulSoup helpers.
Provides reusable element-level methods for all page extractors.
"""

from typing import Iterable, List, Optional

from bs4 import Tag

from logger import HTMLConstants

from .text_utils import clean_text, extract_id


class BaseDataExtractor:
    """
    Base class providing common element inspection methods.

    The ksi.is markup is utility-class heavy (Tailwind), so most lookups
    test class tokens rather than semantic selectors.
    """

    def __init__(self):
        self.html = HTMLConstants

    @staticmethod
    def class_tokens(element: Tag) -> List[str]:
        if not isinstance(element, Tag):
            return []
        classes = element.get("class") or []
        if isinstance(classes, str):
            return classes.split()
        return list(classes)

    def class_string(self, element: Tag) -> str:
        return " ".join(self.class_tokens(element))

    def has_classes(self, element: Tag, *tokens: str) -> bool:
        """True when the element carries every one of the class tokens."""
        present = set(self.class_tokens(element))
        return all(token in present for token in tokens)

    def has_any_class(self, element: Tag, tokens: Iterable[str]) -> bool:
        present = set(self.class_tokens(element))
        return any(token in present for token in tokens)

    @staticmethod
    def element_text(element: Optional[Tag]) -> str:
        """Flattened, whitespace-collapsed text of an element."""
        if element is None:
            return ""
        return clean_text(element.get_text(" "))

    @staticmethod
    def child_tags(element: Tag) -> List[Tag]:
        return [child for child in element.children if isinstance(child, Tag)]

    def player_links(self, root: Tag) -> List[Tag]:
        """Anchors pointing at a player profile, in document order."""
        return [
            anchor
            for anchor in root.find_all("a", href=True)
            if self.html.PLAYER_LINK_PREFIX in anchor["href"]
        ]

    def team_links(self, root: Tag) -> List[Tag]:
        return [
            anchor
            for anchor in root.find_all("a", href=True)
            if self.html.TEAM_LINK_MARKER in anchor["href"]
        ]

    @staticmethod
    def link_id(anchor: Optional[Tag]) -> Optional[str]:
        if anchor is None:
            return None
        return extract_id(anchor.get("href"))

    def has_icon(self, root: Tag, alt: str) -> bool:
        return root.find("img", alt=alt) is not None

    def find_span_with_text(self, root: Tag, text: str) -> Optional[Tag]:
        """First <span> whose cleaned text equals ``text`` exactly."""
        for span in root.find_all("span"):
            if self.element_text(span) == text:
                return span
        return None
