"""
Parsed XML documents returned by the Tracker v3 API.

Responses look like::

    <stories type="array" count="1">
      <story><id type="integer">42</id><name>Login</name></story>
    </stories>

XmlElement lookups fail explicitly: ``child()`` raises MissingElementError
when the element is absent, ``find()`` returns None.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple
from xml.etree import ElementTree

from .errors import MissingElementError, ResponseParseError

SNIPPET_LENGTH = 500


@dataclass(frozen=True)
class XmlElement:
    tag: str
    attrib: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: Tuple["XmlElement", ...] = ()

    @classmethod
    def from_etree(cls, node: ElementTree.Element) -> "XmlElement":
        return cls(
            tag=node.tag,
            attrib=dict(node.attrib),
            text=(node.text or "").strip(),
            children=tuple(cls.from_etree(c) for c in node),
        )

    def __iter__(self) -> Iterator["XmlElement"]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    @property
    def is_array(self) -> bool:
        return self.attrib.get("type") == "array"

    def find(self, tag: str) -> Optional["XmlElement"]:
        for c in self.children:
            if c.tag == tag:
                return c
        return None

    def findall(self, tag: str) -> List["XmlElement"]:
        return [c for c in self.children if c.tag == tag]

    def child(self, tag: str) -> "XmlElement":
        found = self.find(tag)
        if found is None:
            raise MissingElementError(tag=tag, parent=self.tag)
        return found

    def child_text(self, tag: str) -> str:
        return self.child(tag).text

    def text_of(self, tag: str, default: Optional[str] = None) -> Optional[str]:
        found = self.find(tag)
        return found.text if found is not None else default

    def to_dict(self) -> Any:
        """
        Convert to JSON-friendly data.
        - leaf elements become their text (None when empty)
        - type="array" elements become lists
        - repeated child tags are collected into lists
        """
        if not self.children:
            return self.text or None
        if self.is_array:
            return [c.to_dict() for c in self.children]

        out: Dict[str, Any] = {}
        for c in self.children:
            value = c.to_dict()
            if c.tag in out:
                existing = out[c.tag]
                if not isinstance(existing, list):
                    out[c.tag] = [existing]
                out[c.tag].append(value)
            else:
                out[c.tag] = value
        return out


def parse_xml(text: Optional[str]) -> XmlElement:
    """Parse a response body; empty or malformed input raises ResponseParseError."""
    if not text or not text.strip():
        raise ResponseParseError("Expected XML, got an empty body", snippet="")

    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        snippet = text[:SNIPPET_LENGTH]
        raise ResponseParseError(
            f"Expected XML, got malformed body snippet: {snippet!r}",
            snippet=snippet,
        ) from exc

    return XmlElement.from_etree(root)


__all__ = ["XmlElement", "parse_xml"]
