"""Knowledge base normalization and editing.

Widget admins submit "extra facts" for a website in whatever shape their
client produces: lists of {title, value} objects, "Title: a, b" strings,
nested lists, or one big semicolon-separated string. Everything here turns
those payloads into an ordered list of KnowledgeEntry and keeps that list
consistent across incremental edits.

Parsing never raises. Pieces that cannot be understood end up with no
values and are dropped.

Titles are compared case-insensitively (after trimming) everywhere: the
write-merge rule, lookups by title, and the matcher all agree on that.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

logger = logging.getLogger(__name__)

SENTINEL_TITLE = "product"


@dataclass
class KnowledgeEntry:
    title: str
    values: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return title_key(self.title)

    def to_dict(self) -> dict:
        # "value" is the field name widget clients send and read back
        return {"title": self.title, "value": list(self.values)}


class RawShape(str, enum.Enum):
    """What a raw knowledge-base payload (or one item of it) looks like."""
    EMPTY = "empty"
    ENTRY = "entry"
    OBJECT = "object"
    STRING = "string"
    LIST = "list"
    OTHER = "other"


def title_key(title: str) -> str:
    return (title or "").strip().lower()


def classify_raw(raw: Any) -> RawShape:
    if raw is None:
        return RawShape.EMPTY
    if isinstance(raw, KnowledgeEntry):
        return RawShape.ENTRY
    if isinstance(raw, dict):
        if any(k in raw for k in ("title", "value", "values")):
            return RawShape.OBJECT
        return RawShape.OTHER
    if isinstance(raw, str):
        return RawShape.STRING
    if isinstance(raw, (list, tuple)):
        return RawShape.LIST
    return RawShape.OTHER


def _dedupe(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def _split_commas(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def coerce_values(value: Any) -> list[str]:
    """Coerce a client 'value' field into a clean list of strings."""
    if value is None or isinstance(value, dict):
        return []
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if item is None or isinstance(item, (dict, list, tuple)):
                continue
            text = str(item).strip()
            if text:
                items.append(text)
        return _dedupe(items)
    if isinstance(value, str):
        return _dedupe(_split_commas(value))
    text = str(value).strip()
    return [text] if text else []


def _from_object(obj: dict) -> KnowledgeEntry:
    title = obj.get("title")
    title = str(title).strip() if title not in (None, "") else ""
    raw_value = obj["values"] if "values" in obj else obj.get("value")
    return KnowledgeEntry(title=title or SENTINEL_TITLE, values=coerce_values(raw_value))


def _from_string(text: str) -> KnowledgeEntry:
    title, sep, rest = text.partition(":")
    if not sep:
        return KnowledgeEntry(title=SENTINEL_TITLE, values=coerce_values(text))
    return KnowledgeEntry(title=title.strip() or SENTINEL_TITLE, values=coerce_values(rest))


def _from_item(item: Any) -> KnowledgeEntry | None:
    shape = classify_raw(item)
    if shape is RawShape.ENTRY:
        return KnowledgeEntry(title=item.title.strip() or SENTINEL_TITLE, values=coerce_values(item.values))
    if shape is RawShape.OBJECT:
        return _from_object(item)
    if shape is RawShape.STRING:
        return _from_string(item)
    if shape is RawShape.LIST:
        return KnowledgeEntry(title=SENTINEL_TITLE, values=coerce_values(item))
    return None


def normalize_knowledge_base(raw: Any) -> list[KnowledgeEntry]:
    """Turn any supported client payload into canonical entries.

    Entries are returned in input order and are not merged with each other;
    that happens on write via merge_knowledge_base. Running this over its
    own output returns an equal list.
    """
    shape = classify_raw(raw)

    if shape is RawShape.EMPTY:
        items: list[Any] = []
    elif shape is RawShape.LIST:
        items = list(raw)
    elif shape is RawShape.STRING:
        items = [chunk for chunk in raw.split(";") if chunk.strip()] if ";" in raw else [raw]
    elif shape in (RawShape.OBJECT, RawShape.ENTRY):
        items = [raw]
    else:
        logger.debug("Ignoring knowledge base payload of type %s", type(raw).__name__)
        items = []

    entries = []
    for item in items:
        entry = _from_item(item)
        if entry is not None and entry.values:
            entries.append(entry)
    return entries


def merge_knowledge_base(
    existing: list[KnowledgeEntry], incoming: list[KnowledgeEntry]
) -> list[KnowledgeEntry]:
    """Apply the write-merge rule and return a new list.

    An incoming entry whose title matches an existing one (case-insensitive)
    has its values unioned into that entry, preserving first-seen order.
    Otherwise it is appended.
    """
    merged = [KnowledgeEntry(title=e.title, values=list(e.values)) for e in existing]
    index = {e.key: e for e in merged}
    for entry in incoming:
        target = index.get(entry.key)
        if target is None:
            target = KnowledgeEntry(title=entry.title, values=[])
            merged.append(target)
            index[target.key] = target
        target.values = _dedupe([*target.values, *entry.values])
    return [e for e in merged if e.values]


def load_knowledge_base(stored: Any) -> list[KnowledgeEntry]:
    """Read a knowledge base column back into entries, folding duplicates."""
    return merge_knowledge_base([], normalize_knowledge_base(stored))


def dump_knowledge_base(entries: list[KnowledgeEntry]) -> list[dict]:
    return [e.to_dict() for e in entries]


def entry_titles(entries: list[KnowledgeEntry]) -> list[str]:
    return [e.title for e in entries]


def find_entry(entries: list[KnowledgeEntry], title: str) -> KnowledgeEntry | None:
    key = title_key(title)
    for entry in entries:
        if entry.key == key:
            return entry
    return None


def remove_entry(entries: list[KnowledgeEntry], title: str) -> list[KnowledgeEntry]:
    key = title_key(title)
    return [e for e in entries if e.key != key]


def replace_entry(
    entries: list[KnowledgeEntry], title: str, replacement: KnowledgeEntry
) -> list[KnowledgeEntry]:
    """Swap the entry at `title` for `replacement`, keeping its position.

    If the replacement's title collides with a different existing entry, the
    values are merged into that entry and the old slot disappears.
    """
    key = title_key(title)
    new_key = replacement.key
    if new_key != key and find_entry(entries, replacement.title) is not None:
        return merge_knowledge_base(remove_entry(entries, title), [replacement])

    out = []
    for entry in entries:
        if entry.key == key:
            out.append(KnowledgeEntry(title=replacement.title, values=_dedupe(replacement.values)))
        else:
            out.append(KnowledgeEntry(title=entry.title, values=list(entry.values)))
    return [e for e in out if e.values]


def remove_value(entries: list[KnowledgeEntry], title: str, value: str) -> list[KnowledgeEntry]:
    """Drop one value from an entry; the entry goes away once it is empty."""
    key = title_key(title)
    out = []
    for entry in entries:
        values = [v for v in entry.values if v != value] if entry.key == key else list(entry.values)
        if values:
            out.append(KnowledgeEntry(title=entry.title, values=values))
    return out
