"""
Duplicate key detection and extraction warnings.

Every warning carries one Figma link per node involved, built from the
provenance stub (``record["debug"]``) each node parser attaches.
"""

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote

FIGMA_FILE_URL = "https://www.figma.com/file"
# encodeURIComponent leaves these unescaped
_LINK_SAFE = "!~*'()"


@dataclass
class FigmaFile:
    """A Figma file as declared in the config: display name, file key, pages."""
    name: str
    url: str
    pages: list = field(default_factory=list)

    def node_link(self, node_id) -> str:
        return f"{FIGMA_FILE_URL}/{self.url}/{self.name}?node-id={quote(str(node_id), safe=_LINK_SAFE)}"


@dataclass
class WarningLink:
    link: str
    page: str


@dataclass
class ExtractionWarning:
    key: str
    urls: list
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "urls": [{"link": u.link, "page": u.page} for u in self.urls],
            "description": self.description,
        }


def provenance_id(record: dict):
    """Source node id of a record, falling back to the record's own id."""
    debug = record.get("debug") or {}
    return debug.get("id") or record.get("id")


def create_warning(
    node: dict,
    figma_file: FigmaFile,
    description: Optional[str] = None,
    page: Optional[str] = None,
    urls: Optional[list] = None,
    key: Optional[str] = None,
) -> ExtractionWarning:
    """Single-location warning for ``node`` (a raw node or an extracted record)."""
    if urls is None:
        urls = [WarningLink(link=figma_file.node_link(provenance_id(node)), page=page or "unknown")]
    return ExtractionWarning(key=key if key is not None else node.get("name", ""), urls=urls, description=description)


def _is_conflict(new: dict, old: dict, variant: Optional[str]) -> bool:
    if variant:
        new_variants = set((new.get("variants") or {}).keys())
        old_variants = set((old.get("variants") or {}).keys())
        return bool(new_variants & old_variants)
    # Records without characters (images, tokens) collide on the key alone
    if "characters" not in new or "characters" not in old:
        return True
    return new["characters"] != old["characters"]


def find_duplicate_warnings(
    new_records: dict,
    old_records: dict,
    figma_file: FigmaFile,
    page: Optional[str] = None,
    variant: Optional[str] = None,
) -> list:
    """One warning per key found in both maps that is a genuine conflict.

    With ``variant`` set, a conflict means both records declare the same style
    variant. Without it, identical duplicate text is tolerated and anything
    else sharing a key is reported.
    """
    warnings = []
    for key, record in new_records.items():
        old = old_records.get(key)
        if old is None or not _is_conflict(record, old, variant):
            continue
        urls = [
            WarningLink(link=figma_file.node_link(provenance_id(r)), page=page or "unknown")
            for r in (record, old)
        ]
        warnings.append(create_warning(
            record,
            figma_file,
            key=key,
            page=(record.get("debug") or {}).get("page"),
            urls=urls,
            description=f"found duplicate keys in {len(urls)} locations",
        ))
    return warnings


def missing_variant_warnings(missing: list, figma_file: FigmaFile) -> list:
    """Turn ``(record, missing_variant_names)`` pairs into warnings."""
    return [
        create_warning(
            {"id": record.get("id"), "name": record.get("name"), "debug": record.get("debug")},
            figma_file,
            page=(record.get("debug") or {}).get("page"),
            description=f"{record.get('name')} is missing the following variants: {', '.join(names)}",
        )
        for record, names in missing
    ]


def format_warnings_log(warnings: list) -> str:
    """Plain-text warning report, one block per warning."""
    blocks = []
    for warning in warnings:
        links = "\n".join(f"{u.link} ({u.page})" for u in warning.urls)
        blocks.append(f"Key: {warning.key}\n{warning.description or ''}\n{links}\n\n")
    return "".join(blocks)
