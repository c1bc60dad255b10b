"""Match a visitor question against a website's knowledge base.

Strategies run in a fixed order and the first one that produces a result
wins:

1. list-style question -> title match
2. value match (word overlap plus a containment bonus), score >= 1
3. title match for anything still unanswered

Ties always go to the first entry (then first value) in knowledge-base
order, which is why the knowledge base is an ordered list.
"""

import enum
import re
from dataclasses import dataclass, field

from app.services.intent import is_list_request
from app.services.knowledge_base import KnowledgeEntry

SERVICE_KEYWORDS = (
    "provide", "offer", "give", "have", "do", "service", "services",
    "work", "product", "products", "what", "which", "list", "tell",
)

CONTAINMENT_BONUS = 3
DIRECT_TITLE_SCORE = 3
MIN_SCORE = 1

_NON_WORD = re.compile(r"\W+", re.ASCII)


class MatchKind(str, enum.Enum):
    TITLE_EXACT = "title-exact"
    TITLE_KEYWORD = "title-keyword"
    VALUE_SUBSTRING = "value-substring"
    VALUE_KEYWORD = "value-keyword"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    entry_title: str
    matched_values: tuple[str, ...] = field(default_factory=tuple)
    match_kind: MatchKind = MatchKind.NONE
    score: int = 0

    @property
    def is_match(self) -> bool:
        return self.match_kind is not MatchKind.NONE

    @property
    def is_title_match(self) -> bool:
        return self.match_kind in (MatchKind.TITLE_EXACT, MatchKind.TITLE_KEYWORD)


NO_MATCH = MatchResult(entry_title="")


def _words(text: str, min_len: int) -> list[str]:
    return [w for w in _NON_WORD.split(text) if len(w) >= min_len]


def match_value(question: str, entries: list[KnowledgeEntry]) -> MatchResult:
    """Find the single best value across every entry."""
    q = question.lower()
    q_words = _words(q, 3)

    best = NO_MATCH
    for entry in entries:
        for value in entry.values:
            v = value.lower()
            v_words = _words(v, 3)
            score = sum(
                1 for qw in q_words for vw in v_words if qw in vw or vw in qw
            )
            contained = q in v or v in q
            if contained:
                score += CONTAINMENT_BONUS
            if score > best.score:
                best = MatchResult(
                    entry_title=entry.title,
                    matched_values=(value,),
                    match_kind=MatchKind.VALUE_SUBSTRING if contained else MatchKind.VALUE_KEYWORD,
                    score=score,
                )

    return best if best.score >= MIN_SCORE else NO_MATCH


def match_title(
    question: str, entries: list[KnowledgeEntry], list_request: bool = False
) -> MatchResult:
    """Find the entry whose title the question is about.

    Direct containment short-circuits on the first hit. Otherwise titles are
    scored on shared long words; list-style questions that use a service
    keyword also give a point to "service"/"product" titles.
    """
    q = question.lower().strip()

    for entry in entries:
        if entry.key in q or q in entry.key:
            return MatchResult(
                entry_title=entry.title,
                matched_values=tuple(entry.values),
                match_kind=MatchKind.TITLE_EXACT,
                score=DIRECT_TITLE_SCORE,
            )

    q_words = [w for w in q.split() if len(w) > 3]
    asks_for_service = list_request and any(k in q for k in SERVICE_KEYWORDS)

    best = NO_MATCH
    for entry in entries:
        score = 0
        for t_word in entry.key.split():
            if len(t_word) <= 3:
                continue
            score += 2 * sum(1 for qw in q_words if qw in t_word or t_word in qw)
        if asks_for_service and ("service" in entry.key or "product" in entry.key):
            score += 1
        if score > best.score:
            best = MatchResult(
                entry_title=entry.title,
                matched_values=tuple(entry.values),
                match_kind=MatchKind.TITLE_KEYWORD,
                score=score,
            )

    return best if best.score >= MIN_SCORE else NO_MATCH


def classify_and_match(question: str, entries: list[KnowledgeEntry]) -> MatchResult:
    if not question or not question.strip() or not entries:
        return NO_MATCH

    list_request = is_list_request(question)

    if list_request:
        result = match_title(question, entries, list_request=True)
        if result.is_match:
            return result

    result = match_value(question, entries)
    if result.is_match:
        return result

    return match_title(question, entries, list_request=list_request)
