"""XML parsing into a compact attributed tree, and tree flattening."""
import logging
import re
from typing import Any, Dict, List

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup

from processor.errors import InputShapeError

logger = logging.getLogger(__name__)

ATTRIBUTES_KEY = '_attributes'
TEXT_KEY = '_text'
VALUE_KEY = 'value'

CDATA_PATTERN = re.compile(r'<!\[CDATA\[.*?\]\]>', re.DOTALL)


def parse_document(text: str) -> Dict[str, Any]:
    """
    Parse XML text into a compact attributed tree.

    Every element becomes a dict holding its attributes under ``_attributes``,
    its trimmed text under ``_text`` and one key per child tag. A tag seen
    more than once under the same parent maps to a list. CDATA sections,
    comments and processing instructions are dropped.

    Args:
        text: Raw XML document

    Returns:
        Dict with the root tag name as its single key

    Raises:
        InputShapeError: If the text contains no root element
    """
    if not text or not text.strip():
        raise InputShapeError("Schedule document is empty")

    try:
        soup = BeautifulSoup(CDATA_PATTERN.sub('', text), 'xml')
    except ParserRejectedMarkup as e:
        raise InputShapeError(f"Schedule document could not be parsed: {e}") from e

    root = next((child for child in soup.children if isinstance(child, Tag)), None)
    if root is None:
        raise InputShapeError("Schedule document has no root element")

    logger.debug(f"Parsed document with root element <{root.name}>")
    return {root.name: _element_to_node(root)}


def _element_to_node(element: Tag) -> Dict[str, Any]:
    node: Dict[str, Any] = {}
    if element.attrs:
        node[ATTRIBUTES_KEY] = {key: str(value) for key, value in element.attrs.items()}

    text_parts = []
    for child in element.children:
        if isinstance(child, Tag):
            _add_child(node, child.name, _element_to_node(child))
        elif type(child) is NavigableString:
            stripped = child.strip()
            if stripped:
                text_parts.append(stripped)

    if text_parts:
        node[TEXT_KEY] = ''.join(text_parts)

    return node


def _add_child(node: Dict[str, Any], name: str, child: Dict[str, Any]) -> None:
    if name not in node:
        node[name] = child
    elif isinstance(node[name], list):
        node[name].append(child)
    else:
        node[name] = [node[name], child]


def flatten_data(element: Any) -> Any:
    """
    Normalize a parsed tree into plain nested values.

    A dict whose only key is ``value`` collapses to that value; lists and
    other dicts are rebuilt with their members flattened; scalars pass
    through unchanged.
    """
    if isinstance(element, list):
        return [flatten_data(item) for item in element]

    if isinstance(element, dict):
        if len(element) == 1 and VALUE_KEY in element:
            return flatten_data(element[VALUE_KEY])

        return {key: flatten_data(value) for key, value in element.items()}

    return element


def as_list(node: Any) -> List[Any]:
    """Return a node that may be single or repeated as a list."""
    if node is None:
        return []
    if isinstance(node, list):
        return node
    return [node]


def get_text(node: Any) -> Any:
    """Return the ``_text`` of an element node, or None."""
    if isinstance(node, dict):
        return node.get(TEXT_KEY)
    return None


def get_attribute(node: Any, name: str) -> Any:
    """Return an attribute of an element node, or None."""
    if isinstance(node, dict):
        attributes = node.get(ATTRIBUTES_KEY)
        if isinstance(attributes, dict):
            return attributes.get(name)
    return None
