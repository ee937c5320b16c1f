"""
Design tokens — shared styles and constant frames to token records.

Two sources are recognised:

* nodes that define a shared style of the file (``file["styles"]``):
  FILL styles become colors, TEXT styles typography, EFFECT styles shadows;
* constant frames: a frame holding a text layer named ``emu_token_type``
  whose characters name the group (e.g. ``Spacings``). Every other text
  layer in that frame becomes one token.

Records are keyed ``"<Group>.<tokenName>"``; ``group_tokens`` folds them into
one dict per group.
"""

from typing import Optional

from .colors import MissingArgumentError, paint_to_css, rgb_string_alpha_merged
from .document_parser import ParserContext
from .naming import camel_case
from .texts import parse_style

TOKEN_TYPE_LAYER_NAME = "emu_token_type"

STYLE_GROUPS = {
    "FILL": "Colors",
    "TEXT": "Typography",
    "EFFECT": "Shadows",
}

_TYPOGRAPHY_FIELDS = ("fontFamily", "fontSize", "fontWeight", "lineHeight", "letterSpacing")
_SHADOW_TYPES = ("DROP_SHADOW", "INNER_SHADOW")


def parse_style_nodes(file: dict) -> list:
    """Shared styles of a file response, each tagged with its ``nodeId``."""
    return [{**style, "nodeId": node_id} for node_id, style in (file.get("styles") or {}).items()]


def parse_key_name(name: str, no_prefix: bool = False) -> str:
    if no_prefix:
        name = name.split("/")[-1]
    return camel_case(name)


def _parse_value(raw: str):
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def _visible(items) -> list:
    return [item for item in items or [] if item.get("visible", True)]


def _fill_value(node: dict) -> Optional[str]:
    fills = _visible(node.get("fills"))
    if not fills:
        return None
    fill = fills[0]
    if fill.get("type") != "SOLID":
        return paint_to_css(fill)
    if fill.get("color") is None:
        raise MissingArgumentError("Missing fills")
    # Solid colors are flattened onto white, like the shadow colors
    return rgb_string_alpha_merged(fill["color"])


def _typography_value(node: dict) -> Optional[dict]:
    style = parse_style(node.get("style"))
    value = {k: style[k] for k in _TYPOGRAPHY_FIELDS if style.get(k) is not None}
    return value or None


def _shadow_value(node: dict) -> Optional[str]:
    shadows = [e for e in _visible(node.get("effects")) if e.get("type") in _SHADOW_TYPES]
    if not shadows:
        return None
    parts = []
    for effect in shadows:
        offset = effect.get("offset") or {}
        inset = "inset " if effect["type"] == "INNER_SHADOW" else ""
        color = rgb_string_alpha_merged(effect.get("color") or {})
        parts.append(f"{inset}{offset.get('x', 0)}px {offset.get('y', 0)}px {effect.get('radius', 0)}px {color}")
    return ", ".join(parts)


_STYLE_VALUE = {
    "Colors": _fill_value,
    "Typography": _typography_value,
    "Shadows": _shadow_value,
}


def _record(node: dict, context: ParserContext, group: str, name: str, value) -> tuple:
    no_prefix = bool(context.context_data.get("noPrefix"))
    key_name = parse_key_name(name, no_prefix=no_prefix)
    record = {
        "debug": {"id": node.get("id"), "page": context.page},
        "name": key_name,
        "group": group,
        "value": value,
    }
    return f"{group}.{key_name}", record


def _constant_tokens(node: dict, context: ParserContext) -> dict:
    texts = [c for c in node.get("children") or [] if c.get("type") == "TEXT"]
    marker = next((c for c in texts if c.get("name") == TOKEN_TYPE_LAYER_NAME), None)
    if marker is None:
        return {}
    group = (marker.get("characters") or "").strip()
    if not group:
        context.warn(node, f"'{TOKEN_TYPE_LAYER_NAME}' layer in '{node.get('name')}' is empty")
        return {}
    tokens = {}
    for child in texts:
        if child is marker:
            continue
        key, record = _record(child, context, group, child.get("name", ""), _parse_value(child.get("characters", "")))
        tokens[key] = record
    return tokens


def parse_token_node(node: dict, records: dict, context: ParserContext) -> dict:
    """Node parser for tokens; expects ``context.context_data["styles"]``."""
    styles = context.context_data.get("styles") or {}
    tokens = {}

    for style_type, style_id in (node.get("styles") or {}).items():
        style = styles.get(style_id)
        if not style:
            continue
        group = STYLE_GROUPS.get(style.get("styleType"))
        if group is None:
            continue
        try:
            value = _STYLE_VALUE[group](node)
        except ValueError as e:
            context.warn(node, f"unable to parse {style_type} style '{style.get('name')}': {e}")
            continue
        if value is None:
            continue
        key, record = _record(node, context, group, style.get("name", node.get("name", "")), value)
        tokens[key] = record

    tokens.update(_constant_tokens(node, context))
    if not tokens:
        return records
    return {**records, **tokens}


def group_tokens(records: dict) -> dict:
    """``{"Colors.mainRed": record}`` → ``{"Colors": {"mainRed": value}}``."""
    groups: dict = {}
    for record in records.values():
        groups.setdefault(record["group"], {})[record["name"]] = record["value"]
    return groups
