"""Merge per-variant records into one record with a variant-keyed sub-map."""


def merge_variants(entry: tuple, merged: dict, previous: dict) -> dict:
    """Fold one ``(key, record)`` pair of a fresh variant pass into ``merged``.

    ``previous`` holds the records of the variants processed before this one.
    The fresh record's top-level fields win; its ``variants`` map is unioned
    with the one already stored for the same key in ``previous``.
    """
    key, value = entry
    variants = dict(value.get("variants") or {})
    variants.update((previous.get(key) or {}).get("variants") or {})
    result = dict(merged)
    result[key] = {**value, "variants": variants}
    return result


def merge_variant_pass(parsed: dict, previous: dict, variant_merger=merge_variants) -> dict:
    """Merge a whole variant pass and return the new running accumulator."""
    merged: dict = {}
    for entry in parsed.items():
        merged = variant_merger(entry, merged, previous)
    return {**previous, **merged}
