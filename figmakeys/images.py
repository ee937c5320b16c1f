"""
Image keys — exportable nodes to image records.

Only the reference data is produced here (name, format, scale, node id and
the path the image would be written to). Fetching and writing is up to the
caller.
"""

import os
import posixpath

from .document_parser import ParserContext
from .naming import camel_case

IMAGE_DIR_NAME = "images"


def image_output_dir(out_dir=None) -> str:
    """Directory part of ``out_dir``; a trailing file name is dropped."""
    if not out_dir:
        return IMAGE_DIR_NAME
    if os.path.splitext(out_dir)[1]:
        return os.path.dirname(out_dir) or "."
    return out_dir


def parse_image_name(name: str) -> str:
    return camel_case(posixpath.basename(name).replace("/", "-"))


def parse_image_node(node: dict, records: dict, context: ParserContext) -> dict:
    export_settings = node.get("exportSettings") or []
    if not export_settings:
        return records

    settings = export_settings[0]
    name = parse_image_name(node.get("name", ""))
    image_format = str(settings.get("format", "PNG")).lower()
    scale = (settings.get("constraint") or {}).get("value", 1)
    box = node.get("absoluteBoundingBox") or {}

    record = {
        "debug": {"id": node.get("id"), "page": context.page},
        "name": name,
        "format": image_format,
        "scale": scale,
        "id": node.get("id"),
        "url": os.path.join(image_output_dir(context.out_dir), f"{name}.{image_format}"),
    }

    if context.variant:
        previous = (records.get(name) or {}).get("variants") or {}
        if context.variant in previous:
            context.warn(node, f"found duplicate image inside variant {context.variant} frame")
        record["variants"] = {
            **previous,
            context.variant: {"id": node.get("id"), "width": box.get("width"), "height": box.get("height")},
        }
    return {**records, name: record}


def group_images_by_type_and_scale(records: dict) -> dict:
    """Bucket records by ``"<format>_<scale>"``; one images request per bucket."""
    groups: dict = {}
    for record in records.values():
        groups.setdefault(f"{record['format']}_{record['scale']}", []).append(record)
    return groups


def request_scale(scale) -> float:
    # The images endpoint caps the scale at 4
    return 1 if scale > 4 else scale
