"""Tests for the personality formatting pass."""

import pytest

from app.schemas.ai import PersonalityConfig
from app.services.personality import (
    CLOSINGS,
    EMOJI_PALETTES,
    MARKDOWN_BULLET,
    OPENERS,
    apply_personality,
)

PLAIN = PersonalityConfig(emoji_level="minimal", use_markdown=False, be_enthusiastic=False)


def first(seq):
    return seq[0]


def test_defaults():
    config = PersonalityConfig()
    assert config.tone == "friendly"
    assert config.emoji_level == "moderate"
    assert config.detail_level == "balanced"
    assert config.use_markdown is True
    assert config.be_enthusiastic is True


@pytest.mark.parametrize("raw", [
    {"tone": "sarcastic"},
    {"tone": 7},
    {"emoji_level": "extreme", "detail_level": None},
    {"use_markdown": "yes", "be_enthusiastic": 1},
])
def test_unknown_values_fall_back_to_defaults(raw):
    assert PersonalityConfig(**raw) == PersonalityConfig()


def test_known_values_are_case_insensitive():
    assert PersonalityConfig(tone=" Professional ").tone == "professional"


def test_camel_case_keys_accepted():
    config = PersonalityConfig.model_validate({
        "tone": "direct",
        "emojiLevel": "minimal",
        "detailLevel": "brief",
        "useMarkdown": False,
        "beEnthusiastic": False,
    })
    assert config == PersonalityConfig(
        tone="direct", emoji_level="minimal", detail_level="brief", use_markdown=False, be_enthusiastic=False
    )


def test_empty_text_untouched():
    assert apply_personality("", PersonalityConfig()) == ""


def test_plain_config_only_adds_closing():
    text = "We offer SEO services to boost your online business!"
    out = apply_personality(text, PLAIN, choose=first)
    assert out == f"{text}\n\n{CLOSINGS[0]}"


def test_no_closing_for_short_text_or_question():
    assert apply_personality("Hi there.", PLAIN) == "Hi there."
    question = "Which of our many services would you like to hear more about?"
    assert apply_personality(question, PLAIN) == question


def test_brief_detail_suppresses_closing():
    config = PLAIN.model_copy(update={"detail_level": "brief"})
    text = "We offer SEO services to boost your online business!"
    assert apply_personality(text, config) == text


@pytest.mark.parametrize("tone", sorted(OPENERS))
def test_tone_selects_opener(tone):
    config = PLAIN.model_copy(update={"tone": tone, "be_enthusiastic": True})
    out = apply_personality("Hello.", config, choose=first)
    assert out.startswith(OPENERS[tone][0])


def test_moderate_emoji_accents_first_excitement_word():
    config = PLAIN.model_copy(update={"emoji_level": "moderate"})
    out = apply_personality("A great plan, truly great.", config, choose=first)
    accent = EMOJI_PALETTES["moderate"][0]
    assert out == f"A great {accent} plan, truly great."


def test_high_emoji_accents_every_excitement_word():
    config = PLAIN.model_copy(update={"emoji_level": "high"})
    out = apply_personality("Great plan, best price.", config, choose=first)
    accent = EMOJI_PALETTES["high"][0]
    assert out == f"Great {accent} plan, best {accent} price."


def test_markdown_bullets_and_key_terms():
    config = PLAIN.model_copy(update={"use_markdown": True, "detail_level": "brief"})
    text = "Our services:\n\n✅ Web Design\n- SEO\n• Hosting"
    out = apply_personality(text, config)
    assert "**services**" in out
    assert f"{MARKDOWN_BULLET} Web Design" in out
    assert f"{MARKDOWN_BULLET} SEO" in out
    assert f"{MARKDOWN_BULLET} Hosting" in out
    assert "✅" not in out


def test_default_config_when_none():
    out = apply_personality("We offer great services for you and your team.", None, choose=first)
    assert out.startswith(OPENERS["friendly"][0])
    assert "**services**" in out
    assert out.endswith(CLOSINGS[0])
