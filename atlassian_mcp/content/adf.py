"""
Content - ADF Flattener

Atlassian Document Format (Jira rich text) → readable plain text.
"""

from typing import Any, Dict, List


def _children(node: Any) -> List[Dict[str, Any]]:
    if not isinstance(node, dict):
        return []
    content = node.get("content")
    return content if isinstance(content, list) else []


def _apply_marks(text: str, marks: List[Dict[str, Any]]) -> str:
    for mark in marks:
        kind = mark.get("type")
        if kind == "strong":
            text = f"**{text}**"
        elif kind == "em":
            text = f"*{text}*"
        elif kind == "code":
            text = f"`{text}`"
        elif kind == "link":
            href = (mark.get("attrs") or {}).get("href")
            if href:
                text = f"[{text}]({href})"
    return text


def node_text(node: Any) -> str:
    """Inline text of a node, recursing into nested content."""
    parts = []
    for child in _children(node):
        if child.get("type") == "text" and child.get("text"):
            parts.append(_apply_marks(child["text"], child.get("marks") or []))
        elif _children(child):
            parts.append(node_text(child))
    return " ".join(p for p in parts if p)


def _list_text(node: Dict[str, Any]) -> str:
    ordered = node.get("type") == "orderedList"
    lines = []
    for index, item in enumerate(_children(node)):
        if item.get("type") != "listItem":
            continue
        text = node_text(item)
        if text:
            prefix = f"{index + 1}. " if ordered else "• "
            lines.append(f"{prefix}{text}")
    return "\n".join(lines)


def _table_text(node: Dict[str, Any]) -> str:
    rows = []
    for row in _children(node):
        if row.get("type") != "tableRow":
            continue
        cells = [
            node_text(cell)
            for cell in _children(row)
            if cell.get("type") in ("tableCell", "tableHeader") and _children(cell)
        ]
        if cells:
            rows.append(cells)

    lines = []
    for index, cells in enumerate(rows):
        lines.append(f"| {' | '.join(cells)} |")
        if index == 0:
            lines.append(f"| {' | '.join('---' for _ in cells)} |")
    return "\n".join(lines)


def adf_to_text(adf: Any) -> str:
    """
    Flatten an ADF document to text.

    Headings become ``#`` lines, lists are bulleted or numbered, tables are
    rendered as pipe rows and code blocks are fenced. Unknown block types
    fall back to their inline text.

    Args:
        adf: ADF document dict (``{"type": "doc", "content": [...]}``)

    Returns:
        Blocks joined by blank lines ("" for anything that is not ADF)
    """
    blocks = []
    for node in _children(adf):
        kind = node.get("type")
        attrs = node.get("attrs") or {}
        text = ""

        if kind == "heading":
            inner = node_text(node)
            if inner:
                text = f"{'#' * (attrs.get('level') or 1)} {inner}"
        elif kind in ("bulletList", "orderedList"):
            text = _list_text(node)
        elif kind == "panel":
            inner = node_text(node)
            if inner:
                prefix = f"[{attrs['panelType']}] " if attrs.get("panelType") else ""
                text = f"{prefix}{inner}"
        elif kind == "codeBlock":
            inner = node_text(node)
            if inner:
                language = f"[{attrs['language']}]\n" if attrs.get("language") else ""
                text = f"{language}```\n{inner}\n```"
        elif kind == "table":
            text = _table_text(node)
        elif kind == "blockquote":
            inner = node_text(node)
            if inner:
                text = "> " + inner.replace("\n", "\n> ")
        elif kind == "mediaGroup":
            names = [
                f"[{(media.get('attrs') or {}).get('filename') or 'Attached file'}]"
                for media in _children(node)
                if media.get("type") == "media" and media.get("attrs")
            ]
            text = "\n\n".join(names)
        else:
            text = node_text(node)

        if text:
            blocks.append(text)

    return "\n\n".join(blocks)
