"""Pick the largest size variant of each image as its canonical export."""


def _area(variant: dict) -> float:
    width = variant.get("width")
    height = variant.get("height")
    return (width if width is not None else 1) * (height if height is not None else 1)


def find_missing_variants(record: dict, variants) -> list:
    present = record.get("variants") or {}
    return [v for v in variants if not present.get(v)]


def resolve_largest_variants(records: dict, variants) -> tuple:
    """Return ``(records, missing)``.

    Each record's ``id`` becomes the id of its largest declared variant
    (width x height, first declared wins a tie). ``missing`` lists
    ``(record, [variant names])`` for records lacking a declared variant.
    """
    if not variants:
        return records, []

    missing = []
    resolved = {}
    for key, record in records.items():
        absent = find_missing_variants(record, variants)
        if absent:
            missing.append((record, absent))
        present = [record["variants"][v] for v in variants if v not in absent]
        if not present:
            resolved[key] = record
            continue
        largest = max(present, key=_area)
        resolved[key] = {**record, "id": largest.get("id") or record.get("id")}
    return resolved, missing
