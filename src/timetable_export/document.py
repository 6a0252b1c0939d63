"""Parsing saved portal pages into a queryable tree."""

from bs4 import BeautifulSoup, Tag

Markup = str | bytes | BeautifulSoup

PARSER = "html.parser"


def load_document(markup: Markup) -> BeautifulSoup:
    """Return a BeautifulSoup tree for the given markup.

    Already parsed documents are returned as-is; the extractors never mutate them.
    """
    if isinstance(markup, BeautifulSoup):
        return markup
    return BeautifulSoup(markup, PARSER)


def node_text(node: Tag | None) -> str | None:
    """Stripped text content of a node, None when missing or blank."""
    if node is None:
        return None
    text = node.get_text().strip()
    return text or None


def has_class(node: Tag, name: str) -> bool:
    return name in (node.get("class") or [])
