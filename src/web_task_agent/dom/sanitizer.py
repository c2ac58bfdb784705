"""Reduce page markup to what an automation agent can act on."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from ..models import LabelInfo

PRESENTATION_ATTRIBUTES = ("class", "style")

NOISE_TAGS = (
    "script",
    "style",
    "meta",
    "link",
    "noscript",
    "svg",
    "path",
    "iframe",
    "img",
    "canvas",
)

SEMANTIC_TAGS = (
    "a",
    "button",
    "input",
    "select",
    "textarea",
    "label",
    "form",
    "header",
    "footer",
    "main",
    "nav",
    "section",
    "article",
)

_PARSER = "html.parser"


def sanitize_html(html: str) -> str:
    """Return the simplified body markup of ``html``.

    Presentation attributes and noise elements go first so that containers
    left empty by their removal are pruned as well.
    """

    soup = BeautifulSoup(html, _PARSER)
    root = soup.body or soup

    for element in root.find_all(True):
        for attribute in PRESENTATION_ATTRIBUTES:
            element.attrs.pop(attribute, None)

    for element in root.find_all(NOISE_TAGS):
        if not element.decomposed:
            element.decompose()

    for container in root.find_all("div"):
        if container.decomposed:
            continue
        if _is_empty_container(container):
            container.decompose()

    return root.decode_contents()


def extract_labels(html: str) -> list[LabelInfo]:
    """Return every ``label`` element's target id and text."""

    soup = BeautifulSoup(html, _PARSER)
    return [
        LabelInfo(target=label.get("for"), text=label.get_text().strip())
        for label in soup.find_all("label")
    ]


def _is_empty_container(element: Tag) -> bool:
    if element.find(SEMANTIC_TAGS) is not None:
        return False
    return not element.get_text().strip()
