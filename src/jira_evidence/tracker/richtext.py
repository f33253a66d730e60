"""Plain-text extraction from Atlassian Document Format descriptions.

ADF is a tree of typed nodes. Only the node kinds that carry description
text are distinguished; everything else is parsed as OTHER and ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class NodeKind(StrEnum):
    """ADF node kinds relevant to text extraction."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> NodeKind:
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class RichTextNode:
    """A node of an ADF document."""

    kind: NodeKind
    text: str = ""
    children: tuple[RichTextNode, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RichTextNode:
        """Build a node tree from decoded ADF JSON.

        Args:
            data: ADF node mapping with 'type', and 'text' or 'content'.

        Returns:
            Parsed node; non-mapping children are dropped.
        """
        kind = NodeKind.parse(data.get("type"))
        text = data.get("text")
        content = data.get("content")
        children: tuple[RichTextNode, ...] = ()
        if isinstance(content, list):
            children = tuple(cls.from_dict(child) for child in content if isinstance(child, Mapping))
        return cls(
            kind=kind,
            text=text if isinstance(text, str) else "",
            children=children,
        )


def plain_text(node: RichTextNode) -> str:
    """Concatenate the text runs of top-level paragraphs.

    A document contributes its paragraphs, a paragraph its direct text
    children and a text node its own text. Other kinds contribute nothing.
    """
    if node.kind is NodeKind.TEXT:
        return node.text
    if node.kind is NodeKind.PARAGRAPH:
        return "".join(child.text for child in node.children if child.kind is NodeKind.TEXT)
    if node.kind is NodeKind.DOC:
        return "".join(
            plain_text(child) for child in node.children if child.kind is NodeKind.PARAGRAPH
        )
    return ""


def description_text(description: str | Mapping[str, Any] | None) -> str:
    """Plain-text form of an issue description.

    Jira API v3 returns ADF; older payloads carry plain strings.
    """
    if not description:
        return ""
    if isinstance(description, str):
        return description

    root = RichTextNode.from_dict(description)
    # A fragment without a "doc" wrapper is read the same way
    if root.kind is NodeKind.OTHER:
        root = RichTextNode(kind=NodeKind.DOC, children=root.children)
    return plain_text(root)
