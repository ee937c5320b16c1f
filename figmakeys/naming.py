"""Key naming helpers shared by the text, image and token parsers."""

import re

# Figma stores soft line breaks as U+2028
LINE_SEPARATOR = "\u2028"


def normalize_line_separators(value: str) -> str:
    return value.replace(LINE_SEPARATOR, "\n")


def camel_case(name: str) -> str:
    """``"arrow-left icon"`` → ``"arrowLeftIcon"``; existing camel humps are kept."""
    words = re.sub(r"[^a-zA-Z0-9]", " ", name).split()
    if not words:
        return ""
    first, rest = words[0], words[1:]
    if first.isupper():
        first = first.lower()
    return first[:1].lower() + first[1:] + "".join(w[:1].upper() + w[1:] for w in rest)


def sort_keys(records: dict) -> dict:
    return {key: records[key] for key in sorted(records)}


def comma_separated_list(value: str = "", delimiter: str = r",|\s") -> list:
    """Split CLI list flags; empty items are dropped."""
    return [v.strip() for v in re.split(delimiter, value or "") if v.strip()]
