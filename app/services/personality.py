"""Personality formatting pass for chat answers.

Applies tone openers, emoji accents, markdown styling and a closing line to
an answer. Variety comes from `choose`, which picks one item from a
sequence; production uses random.choice and tests pass something
deterministic.
"""

import random
import re
from typing import Callable, Sequence

from app.schemas.ai import PersonalityConfig

Chooser = Callable[[Sequence[str]], str]

DEFAULT_PERSONALITY = PersonalityConfig()

OPENERS = {
    "friendly": ("😊 Happy to help! ", "👋 Great question! ", "😊 Sure thing! "),
    "professional": ("Thank you for your question. ", "Certainly. ", "Happy to assist. "),
    "enthusiastic": ("🎉 Awesome question! ", "🚀 Absolutely! ", "✨ Love this question! "),
    "direct": ("Sure. ", "Here you go. ", "Got it. "),
}

EXCITEMENT_WORDS = (
    "great", "amazing", "awesome", "excellent", "perfect",
    "boost", "love", "exciting", "best", "fantastic",
)

EMOJI_PALETTES = {
    "moderate": ("✨", "👍", "😊"),
    "high": ("🚀", "🔥", "🎉", "💯", "🌟"),
}

KEY_TERMS = ("services", "products", "pricing", "free", "discount", "offer")

CLOSINGS = (
    "Is there anything else I can help you with?",
    "Let me know if you have any other questions!",
    "Feel free to ask if you need more details!",
    "Happy to help with anything else you need!",
)

MIN_CLOSING_LENGTH = 40
MARKDOWN_BULLET = "▸"

_EXCITEMENT = re.compile(r"\b(" + "|".join(EXCITEMENT_WORDS) + r")\b", re.IGNORECASE)
_KEY_TERMS = re.compile(r"(?<!\*)\b(" + "|".join(KEY_TERMS) + r")\b(?!\*)", re.IGNORECASE)
_PLAIN_BULLET = re.compile(r"^(\s*)(?:[-*•]|✅|🎯)\s+", re.MULTILINE)


def _add_emojis(text: str, level: str, choose: Chooser) -> str:
    palette = EMOJI_PALETTES.get(level)
    if not palette:
        return text
    # moderate accents the first excited word only, high accents all of them
    count = 0 if level == "high" else 1
    return _EXCITEMENT.sub(lambda m: f"{m.group(1)} {choose(palette)}", text, count=count)


def _apply_markdown(text: str) -> str:
    text = _PLAIN_BULLET.sub(lambda m: f"{m.group(1)}{MARKDOWN_BULLET} ", text)
    return _KEY_TERMS.sub(lambda m: f"**{m.group(1)}**", text)


def apply_personality(
    text: str,
    config: PersonalityConfig | None = None,
    choose: Chooser = random.choice,
) -> str:
    config = config or DEFAULT_PERSONALITY
    out = (text or "").strip()
    if not out:
        return out

    if config.emoji_level != "minimal":
        out = _add_emojis(out, config.emoji_level, choose)

    if config.use_markdown:
        out = _apply_markdown(out)

    if config.be_enthusiastic:
        out = choose(OPENERS[config.tone]) + out

    wants_closing = config.detail_level != "brief" and len(out) > MIN_CLOSING_LENGTH
    if wants_closing and not out.rstrip().endswith("?"):
        out = f"{out}\n\n{choose(CLOSINGS)}"

    return out
