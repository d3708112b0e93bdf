"""Parse the many shapes an "assigned to" cell takes in helpdesk exports."""

import json
import logging
from typing import Any

from helpdesk.domains.tickets.headers import is_blank

logger = logging.getLogger(__name__)


def _split_cell(text: str) -> list[Any]:
    if text.startswith("[") and text.endswith("]"):
        try:
            parsed = json.loads(text.replace("'", '"'))
        except json.JSONDecodeError:
            logger.debug("Unparseable assignee list %r, keeping as one value", text)
            return [text]
        return parsed if isinstance(parsed, list) else [parsed]

    if "," in text:
        return [part.strip() for part in text.split(",")]
    return [text]


def _flatten(values: list[Any]) -> list[str]:
    flat: list[str] = []
    for value in values:
        items = value if isinstance(value, (list, tuple)) else [value]
        for item in items:
            flat.append("" if is_blank(item) else str(item).strip())
    return [item for item in flat if item]


def parse_assignees(value: Any, owner: Any = None) -> list[str]:
    """Return the trimmed, non-empty agent identifiers held in one cell.

    Accepts real lists, pseudo-JSON strings such as ``"['a@x.com', 'b@x.com']"``,
    comma-separated text and single values. Falls back to ``owner`` when no
    assignee remains. Duplicates are kept.
    """
    match value:
        case list() | tuple():
            raw = list(value)
        case _ if is_blank(value):
            raw = []
        case _:
            raw = _split_cell(str(value).strip())

    assignees = _flatten(raw)
    if not assignees and not is_blank(owner):
        fallback = str(owner).strip()
        if fallback:
            assignees = [fallback]
    return assignees
