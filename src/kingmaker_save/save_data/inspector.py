"""
Structure inspection for save documents.

Used when a new game patch renames or reshapes fields: prints a bounded
outline of a document so the new layout can be compared to what the
projectors expect.
"""

from pathlib import Path
from typing import Any, Dict, List

import orjson

MAX_PROPERTIES = 20
MAX_PREVIEW = 100


def _kind(value: Any) -> str:
    if isinstance(value, dict):
        return "Object"
    if isinstance(value, list):
        return "Array"
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, int):
        return "Integer"
    if isinstance(value, float):
        return "Float"
    if isinstance(value, str):
        return "String"
    return "Null"


def file_stats(json_path: Path) -> Dict[str, Any]:
    """Collect size and top-level shape information for a JSON file.

    Errors are reported in the "error" key rather than raised.

    Args:
        json_path: Path to the JSON document

    Returns:
        Dict with file_path, file_size, exists and, for parseable files,
        token_type plus property_count/properties or array_length
    """
    stats: Dict[str, Any] = {"file_path": str(json_path), "exists": json_path.exists()}
    if not stats["exists"]:
        return stats

    size = json_path.stat().st_size
    stats["file_size"] = f"{size / 1024.0:.2f} KB"
    if size == 0:
        return stats

    try:
        with json_path.open("rb") as f:
            data = orjson.loads(f.read())
    except (OSError, orjson.JSONDecodeError) as e:
        stats["error"] = str(e)
        return stats

    stats["token_type"] = _kind(data)
    if isinstance(data, dict):
        stats["property_count"] = len(data)
        stats["properties"] = ", ".join(list(data)[:10])
    elif isinstance(data, list):
        stats["array_length"] = len(data)
    return stats


def outline(node: Any, max_depth: int = 3) -> List[str]:
    """Render a bounded, indented outline of a parsed JSON tree.

    Objects list their first properties with value kinds; arrays show
    their length and the outline of the first element only.

    Args:
        node: Parsed JSON value
        max_depth: Nesting depth at which the outline stops

    Returns:
        Outline lines
    """
    lines: List[str] = []
    _outline(node, lines, 0, max_depth)
    return lines


def _outline(node: Any, lines: List[str], depth: int, max_depth: int) -> None:
    indent = " " * (depth * 2)
    if depth > max_depth:
        lines.append(f"{indent}[... max depth reached ...]")
        return

    if isinstance(node, dict):
        lines.append(f"{indent}Object with {len(node)} properties:")
        for name, value in list(node.items())[:MAX_PROPERTIES]:
            lines.append(f"{indent}  - {name} ({_kind(value)})")
            if isinstance(value, (dict, list)):
                _outline(value, lines, depth + 2, max_depth)
        if len(node) > MAX_PROPERTIES:
            lines.append(f"{indent}  ... and {len(node) - MAX_PROPERTIES} more properties")
    elif isinstance(node, list):
        lines.append(f"{indent}Array with {len(node)} items")
        if node and depth < max_depth:
            lines.append(f"{indent}  First item:")
            _outline(node[0], lines, depth + 2, max_depth)
    else:
        preview = str(node)
        if len(preview) > MAX_PREVIEW:
            preview = preview[:MAX_PREVIEW] + "..."
        lines.append(f"{indent}Value: {preview}")
