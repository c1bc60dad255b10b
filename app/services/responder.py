"""Render match results into the text the chat widget shows.

Every branch returns a non-empty string, so the endpoint always has
something to send back to the visitor.
"""

import logging
import random
import re
from typing import Callable, Sequence

from app.schemas.ai import PersonalityConfig
from app.services.intent import is_category_related
from app.services.knowledge_base import KnowledgeEntry, entry_titles
from app.services.matcher import MatchResult
from app.services.personality import apply_personality

logger = logging.getLogger(__name__)

STOP_WORDS = {"the", "our", "your", "with", "for"}
DEFAULT_RESPONSE = "I can help you with our services. What specific information are you looking for?"

_DISALLOWED = re.compile(r"[^\w\s.,!?\-]", re.ASCII)
_SPACES = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Strip emojis and symbols, keeping letters, digits and basic punctuation."""
    if not text:
        return ""
    return _SPACES.sub(" ", _DISALLOWED.sub("", text)).strip()


def render_title_match(title: str, values: Sequence[str]) -> str:
    lowered = title.lower()
    if "service" in lowered:
        lines = [f"We provide the following {title}:", ""]
        lines += [f"✅ {v}" for v in values]
        lines += ["", f"Which {lowered} are you interested in?"]
    elif "product" in lowered:
        lines = [f"We offer these {title}:", ""]
        lines += [f"🎯 {v}" for v in values]
        lines += ["", f"Would you like more information about any specific {lowered}?"]
    else:
        lines = [f"Here are our {title}:", ""]
        lines += [f"• {v}" for v in values]
        lines += ["", f"Let me know if you need details about any specific item from our {lowered}."]
    return "\n".join(lines)


def _call_to_action_word(value: str) -> str:
    words = value.split(" ")
    first = words[0] or "service"
    if len(first) < 3 or first.lower() in STOP_WORDS:
        first = words[1] if len(words) > 1 else "service"
    return first


def render_value_match(title: str, value: str) -> str | None:
    """One-sentence pitch for a single matched value, or None if nothing survives cleaning."""
    value = clean_text(value)
    if not value:
        return None
    response = (
        f"We offer {value} {clean_text(title.lower())} to boost your online business!"
        f" Would you like me to start the {_call_to_action_word(value)} process?"
    )
    return clean_text(response)


def render_fallback(
    question: str, categories: list[str], entries: list[KnowledgeEntry]
) -> str:
    titles = entry_titles(entries)
    if titles and is_category_related(question, categories):
        return (
            f"I can help you with information about our {', '.join(titles)}. "
            f'For example, you can ask "What {titles[0].lower()} do you provide?"'
        )
    if categories:
        return (
            f"I can only help with questions about our {', '.join(categories)}. "
            "Please ask something related to our services or products."
        )
    return DEFAULT_RESPONSE


def compose_response(
    match: MatchResult | None,
    categories: list[str],
    personality: PersonalityConfig | None = None,
    *,
    question: str = "",
    knowledge_base: list[KnowledgeEntry] | None = None,
    choose: Callable[[Sequence[str]], str] = random.choice,
) -> str:
    categories = [c for c in (categories or []) if isinstance(c, str) and c.strip()]
    entries = knowledge_base or []

    text = None
    if match is not None and match.is_match:
        if match.is_title_match and match.matched_values:
            text = render_title_match(match.entry_title, match.matched_values)
        elif match.matched_values:
            text = render_value_match(match.entry_title, match.matched_values[0])

    if not text:
        text = render_fallback(question, categories, entries)

    if personality is not None:
        text = apply_personality(text, personality, choose=choose)

    return text or DEFAULT_RESPONSE
