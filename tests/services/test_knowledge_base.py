"""Tests for knowledge base normalization and editing."""

from app.services.knowledge_base import (
    SENTINEL_TITLE,
    KnowledgeEntry,
    RawShape,
    classify_raw,
    find_entry,
    load_knowledge_base,
    merge_knowledge_base,
    normalize_knowledge_base,
    remove_entry,
    remove_value,
    replace_entry,
)


def _pairs(entries):
    return [(e.title, e.values) for e in entries]


def test_empty_inputs():
    assert normalize_knowledge_base(None) == []
    assert normalize_knowledge_base([]) == []
    assert normalize_knowledge_base("") == []


def test_title_value_string():
    entries = normalize_knowledge_base("Pricing: Basic,Pro,Enterprise")
    assert _pairs(entries) == [("Pricing", ["Basic", "Pro", "Enterprise"])]


def test_plain_strings_get_sentinel_title():
    entries = normalize_knowledge_base(["Fast shipping", "24/7 support"])
    assert _pairs(entries) == [
        (SENTINEL_TITLE, ["Fast shipping"]),
        (SENTINEL_TITLE, ["24/7 support"]),
    ]


def test_single_string_without_colon_splits_on_commas():
    entries = normalize_knowledge_base("Fast shipping, 24/7 support")
    assert _pairs(entries) == [(SENTINEL_TITLE, ["Fast shipping", "24/7 support"])]


def test_single_object_without_title_gets_sentinel():
    assert _pairs(normalize_knowledge_base({"value": "a, b"})) == [(SENTINEL_TITLE, ["a", "b"])]


def test_plain_strings_merge_on_sequential_writes():
    kb = []
    for raw in ["Fast shipping", "24/7 support"]:
        kb = merge_knowledge_base(kb, normalize_knowledge_base(raw))
    assert _pairs(kb) == [(SENTINEL_TITLE, ["Fast shipping", "24/7 support"])]


def test_object_list_value_coercion():
    entries = normalize_knowledge_base([
        {"title": "Services", "value": ["Web Design", "SEO"]},
        {"title": "Hours", "value": "Mon-Fri, Sat"},
        {"value": 42},
        {"title": "Empty", "value": []},
        {"title": "Broken", "value": {"nested": True}},
    ])
    assert _pairs(entries) == [
        ("Services", ["Web Design", "SEO"]),
        ("Hours", ["Mon-Fri", "Sat"]),
        (SENTINEL_TITLE, ["42"]),
    ]


def test_nested_lists_and_single_object():
    assert _pairs(normalize_knowledge_base([["A", "B"], []])) == [(SENTINEL_TITLE, ["A", "B"])]
    assert _pairs(normalize_knowledge_base({"title": "Team", "value": "Ana, Bo"})) == [
        ("Team", ["Ana", "Bo"])
    ]
    assert normalize_knowledge_base({"unrelated": 1}) == []


def test_semicolon_string():
    entries = normalize_knowledge_base("Services: Design, SEO; Free consultation;  ; Hours: 9-5")
    assert _pairs(entries) == [
        ("Services", ["Design", "SEO"]),
        (SENTINEL_TITLE, ["Free consultation"]),
        ("Hours", ["9-5"]),
    ]


def test_malformed_input_never_raises():
    assert normalize_knowledge_base(12345) == []
    assert normalize_knowledge_base([None, 3.5, object()]) == []
    assert normalize_knowledge_base(":") == []


def test_duplicate_values_within_entry_removed():
    entries = normalize_knowledge_base({"title": "Tags", "value": ["a", "b", "a", " b "]})
    assert entries[0].values == ["a", "b"]


def test_no_entry_has_empty_values():
    raw = [{"title": "X", "value": ""}, "Y:", ["", "  "], {"title": "Z", "value": ["ok"]}]
    entries = normalize_knowledge_base(raw)
    assert all(e.values for e in entries)
    assert _pairs(entries) == [("Z", ["ok"])]


def test_normalize_is_idempotent():
    raw = [
        {"title": "Services", "value": "Web Design, SEO"},
        "Pricing: Basic,Pro",
        ["loose", "items"],
    ]
    once = normalize_knowledge_base(raw)
    assert normalize_knowledge_base(once) == once
    dumped = [e.to_dict() for e in once]
    assert normalize_knowledge_base(dumped) == once


def test_classify_raw():
    assert classify_raw(None) is RawShape.EMPTY
    assert classify_raw(KnowledgeEntry("a", ["b"])) is RawShape.ENTRY
    assert classify_raw({"title": "a"}) is RawShape.OBJECT
    assert classify_raw({"foo": "a"}) is RawShape.OTHER
    assert classify_raw("a") is RawShape.STRING
    assert classify_raw(["a"]) is RawShape.LIST
    assert classify_raw(1.5) is RawShape.OTHER


def test_merge_unions_values_in_first_seen_order():
    existing = [KnowledgeEntry("Services", ["Web Design", "SEO"])]
    incoming = [KnowledgeEntry("Services", ["SEO", "Hosting"]), KnowledgeEntry("FAQ", ["Yes"])]
    merged = merge_knowledge_base(existing, incoming)
    assert _pairs(merged) == [("Services", ["Web Design", "SEO", "Hosting"]), ("FAQ", ["Yes"])]
    # inputs untouched
    assert existing[0].values == ["Web Design", "SEO"]


def test_merge_titles_case_insensitive():
    merged = merge_knowledge_base(
        [KnowledgeEntry("Services", ["A"])], [KnowledgeEntry("services ", ["B"])]
    )
    assert _pairs(merged) == [("Services", ["A", "B"])]


def test_load_folds_duplicate_stored_titles():
    stored = [{"title": "product", "value": ["x"]}, {"title": "product", "value": ["y"]}]
    assert _pairs(load_knowledge_base(stored)) == [("product", ["x", "y"])]


def test_entry_edits():
    kb = [KnowledgeEntry("Services", ["A", "B"]), KnowledgeEntry("Pricing", ["Pro"])]

    assert find_entry(kb, "SERVICES").title == "Services"
    assert find_entry(kb, "missing") is None
    assert _pairs(remove_entry(kb, "pricing")) == [("Services", ["A", "B"])]

    kb2 = remove_value(kb, "Pricing", "Pro")
    assert _pairs(kb2) == [("Services", ["A", "B"])]
    assert _pairs(remove_value(kb, "Services", "A")) == [("Services", ["B"]), ("Pricing", ["Pro"])]


def test_replace_entry_keeps_position_and_merges_on_rename_collision():
    kb = [KnowledgeEntry("Services", ["A"]), KnowledgeEntry("Pricing", ["Pro"])]

    renamed = replace_entry(kb, "Services", KnowledgeEntry("Offerings", ["C"]))
    assert _pairs(renamed) == [("Offerings", ["C"]), ("Pricing", ["Pro"])]

    collided = replace_entry(kb, "Services", KnowledgeEntry("pricing", ["Basic"]))
    assert _pairs(collided) == [("Pricing", ["Pro", "Basic"])]
