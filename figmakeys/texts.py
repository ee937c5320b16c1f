"""
Text keys — TEXT nodes to ``{key: {name, characters, style | variants}}``.
"""

from typing import Optional

from .colors import format_number, rgba_string, round_decimals
from .document_parser import ParserContext
from .naming import normalize_line_separators


def _px(value) -> Optional[str]:
    return f"{format_number(value)}px" if value else None


def parse_style(style: Optional[dict]) -> dict:
    style = style or {}
    letter_spacing = style.get("letterSpacing")
    line_height = style.get("lineHeightPx")
    return {
        "fontFamily": style.get("fontFamily"),
        "fontSize": _px(style.get("fontSize")),
        "fontWeight": style.get("fontWeight"),
        "letterSpacing": _px(round_decimals(letter_spacing)) if letter_spacing else None,
        "lineHeight": _px(round_decimals(line_height)) if line_height else None,
        "textDecoration": style.get("textDecoration"),
    }


def parse_text_node(node: dict, records: dict, context: ParserContext) -> dict:
    """Node parser for text keys; non-text and excluded nodes leave ``records`` as is."""
    if node.get("type") != "TEXT" or context.policy.is_excluded(node):
        return records

    characters = normalize_line_separators(node.get("characters") or "")
    if characters == "":
        return records

    name = normalize_line_separators(node.get("name", ""))
    fills = node.get("fills") or []
    color = fills[0].get("color") if fills else None
    opacity = node.get("opacity")
    styles = {
        **parse_style(node.get("style")),
        "color": rgba_string(color) if color else None,
        "opacity": round_decimals(opacity, 2) if isinstance(opacity, (int, float)) else opacity,
    }

    frame = context.linkable_parent(node)
    record = {
        "debug": {"id": frame.get("id") if frame else node.get("id"), "page": context.page},
        "name": name,
        "characters": characters,
    }
    if context.variant:
        record["variants"] = {context.variant: {"style": styles}}
    else:
        record["style"] = styles
    return {**records, name: record}


def strip_debug_info(records: dict) -> dict:
    """Drop the provenance stub before records are written anywhere."""
    return {key: {k: v for k, v in value.items() if k != "debug"} for key, value in records.items()}


def text_key_characters(records: dict) -> dict:
    return {key: value.get("characters") for key, value in records.items()}

