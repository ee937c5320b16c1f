"""
find_duplicate_warnings / create_warning 單元測試
"""
from figmakeys.duplicates import (
    ExtractionWarning,
    FigmaFile,
    WarningLink,
    create_warning,
    find_duplicate_warnings,
    format_warnings_log,
    missing_variant_warnings,
)

FILE = FigmaFile(name="Design", url="abc123", pages=["Home", "Settings"])


def text(node_id, characters, page="Home", variants=None):
    rec = {"debug": {"id": node_id, "page": page}, "name": "title", "characters": characters}
    if variants:
        rec["variants"] = {v: {"style": {}} for v in variants}
    return rec


def image(node_id, page="Home", variants=None):
    rec = {"debug": {"id": node_id, "page": page}, "name": "logo", "id": node_id, "format": "png"}
    if variants:
        rec["variants"] = {v: {"id": node_id, "width": 10, "height": 10} for v in variants}
    return rec


def test_node_link_encodes_node_id():
    assert FILE.node_link("12:34") == "https://www.figma.com/file/abc123/Design?node-id=12%3A34"


def test_different_characters_same_key_is_one_warning():
    warnings = find_duplicate_warnings({"title": text("2:1", "Hello")}, {"title": text("1:1", "Hi")}, FILE, page="Home")
    assert len(warnings) == 1
    warning = warnings[0]
    assert warning.key == "title"
    assert [u.link for u in warning.urls] == [FILE.node_link("2:1"), FILE.node_link("1:1")]
    assert all(u.page == "Home" for u in warning.urls)
    assert "2 locations" in warning.description


def test_identical_characters_are_tolerated():
    assert find_duplicate_warnings({"title": text("2:1", "Hi")}, {"title": text("1:1", "Hi")}, FILE) == []


def test_images_collide_on_key_alone():
    warnings = find_duplicate_warnings({"logo": image("2:1")}, {"logo": image("2:1")}, FILE)
    assert len(warnings) == 1


def test_one_side_without_characters_is_a_conflict():
    other = {"debug": {"id": "9:9", "page": "Home"}, "name": "title"}
    assert len(find_duplicate_warnings({"title": text("1:1", "Hi")}, {"title": other}, FILE)) == 1


def test_different_keys_never_conflict():
    assert find_duplicate_warnings({"a": image("1:1")}, {"b": image("1:2")}, FILE) == []


def test_variant_mode_shared_variant_conflicts():
    new = {"title": text("2:1", "Hi", variants=["mobile"])}
    old = {"title": text("1:1", "Hi", variants=["mobile", "desktop"])}
    assert len(find_duplicate_warnings(new, old, FILE, page="Home", variant="mobile")) == 1


def test_variant_mode_disjoint_variants_are_allowed():
    new = {"title": text("2:1", "Other", variants=["desktop"])}
    old = {"title": text("1:1", "Hi", variants=["mobile"])}
    assert find_duplicate_warnings(new, old, FILE, variant="desktop") == []


def test_variant_mode_ignores_other_keys():
    new = {"a": text("2:1", "Hi", variants=["mobile"])}
    old = {"b": text("1:1", "Hi", variants=["mobile"])}
    assert find_duplicate_warnings(new, old, FILE, variant="mobile") == []


def test_links_default_to_unknown_page():
    warnings = find_duplicate_warnings({"logo": image("2:1", page="Settings")}, {"logo": image("1:1")}, FILE)
    assert warnings[0].urls[0].page == "unknown"
    assert warnings[0].to_dict()["key"] == "logo"


def test_create_warning_falls_back_to_node_id():
    warning = create_warning({"id": "5:5", "name": "Bad Key"}, FILE, description="nope", page="Home")
    assert warning.key == "Bad Key"
    assert warning.urls == [WarningLink(link=FILE.node_link("5:5"), page="Home")]


def test_missing_variant_warnings():
    rec = image("3:3", variants=["mobile"])
    warnings = missing_variant_warnings([(rec, ["desktop", "tablet"])], FILE)
    assert len(warnings) == 1
    assert warnings[0].description == "logo is missing the following variants: desktop, tablet"


def test_format_warnings_log():
    warning = ExtractionWarning(key="title", urls=[WarningLink(link="L1", page="Home")], description="dup")
    assert format_warnings_log([warning]) == "Key: title\ndup\nL1 (Home)\n\n"
