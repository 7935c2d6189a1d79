"""
Summary: Rule table that strips URLs, domain tags, CD boilerplate and file extensions from tag text.
Why: Downloaded files often carry site watermarks and ripper defaults instead of real values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

_TOP_LEVEL_DOMAINS: Final[tuple[str, ...]] = (
    "com", "cn", "net", "org", "edu", "gov", "io", "co", "uk", "de", "fr", "jp", "ru",
    "au", "ca", "br", "in", "it", "es", "nl", "se", "no", "dk", "fi", "pl", "cz", "hu",
    "gr", "pt", "ie", "at", "ch", "be", "tr", "kr", "tw", "hk", "sg", "my", "th", "vn",
    "id", "ph", "nz", "za", "mx", "ar", "cl", "pe", "eg", "sa", "ae", "il", "pk", "bd",
    "lk", "np", "mm", "kh", "la", "mn", "kz", "uz", "az", "ge", "am", "by", "ua", "md",
    "ro", "bg", "rs", "hr", "si", "sk", "lt", "lv", "ee", "is", "mt", "cy", "lu", "mc",
    "ad", "li", "sm", "va", "me", "ba", "mk", "al", "xk",
)

_AUDIO_EXTENSIONS: Final[tuple[str, ...]] = (
    "mp3", "wav", "flac", "m4a", "aac", "ogg", "wma", "ape", "wv", "tta", "tak", "ofr",
    "ofs", "off", "rka", "shn", "aa3", "gsm", "3gp", "amr", "awb", "au", "snd", "ra",
    "rm", "ram", "dct", "vox", "sln",
)

SHORT_TRACK_MAX_LENGTH: Final[int] = 50
SEPARATOR_TOKENS: Final[frozenset[str]] = frozenset({"---", "[]"})

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")


class RuleAction(StrEnum):
    """What a matching rule does to the text."""

    DISCARD = "discard"
    STRIP = "strip"


@dataclass(frozen=True, slots=True)
class CleanupRule:
    """One cleanup step.

    ``DISCARD`` rules empty the whole value when they match; ``STRIP`` rules
    delete every match. ``max_length`` limits a rule to shorter texts.
    """

    name: str
    pattern: re.Pattern[str]
    action: RuleAction
    max_length: int | None = None

    def applies_to(self, text: str) -> bool:
        if self.max_length is not None and len(text) >= self.max_length:
            return False
        return self.pattern.search(text) is not None

    def apply(self, text: str) -> str:
        if not self.applies_to(text):
            return text
        if self.action is RuleAction.DISCARD:
            return ""
        return self.pattern.sub("", text)


CLEANUP_RULES: Final[tuple[CleanupRule, ...]] = (
    CleanupRule(
        name="cd-digital-audio",
        pattern=re.compile(r"^CD\s*(?:Digital\s+Audio|DA)\s*,?\s*Track#?\s*\d+.*$", re.IGNORECASE),
        action=RuleAction.DISCARD,
    ),
    CleanupRule(
        name="short-track-number",
        pattern=re.compile(r"^(?:CD\s*)?Track#?\s*\d+.*$", re.IGNORECASE),
        action=RuleAction.DISCARD,
        max_length=SHORT_TRACK_MAX_LENGTH,
    ),
    CleanupRule(
        name="url",
        pattern=re.compile(r"https?://\S+|www\.\S+", re.IGNORECASE),
        action=RuleAction.STRIP,
    ),
    CleanupRule(
        name="bracketed-domain",
        pattern=re.compile(r"\[[^\]]*\.(?:" + "|".join(_TOP_LEVEL_DOMAINS) + r")[^\]]*\]"),
        action=RuleAction.STRIP,
    ),
    CleanupRule(
        name="audio-extension",
        pattern=re.compile(
            r"\.(?:" + "|".join(_AUDIO_EXTENSIONS) + r")(?=\s|$|\.)", re.IGNORECASE
        ),
        action=RuleAction.STRIP,
    ),
)


def _tidy(text: str) -> str:
    collapsed = _WHITESPACE.sub(" ", text).strip()
    return collapsed.rstrip("-").strip()


def clean(text: str, rules: tuple[CleanupRule, ...] = CLEANUP_RULES) -> str:
    """Apply ``rules`` in order and tidy whitespace and trailing dashes.

    Args:
        text: Tag value after encoding repair.
        rules: Ordered rule table. Defaults to ``CLEANUP_RULES``.

    Returns:
        str: Cleaned value, or ``""`` when nothing meaningful is left.
    """
    if not text:
        return text

    cleaned = text
    for rule in rules:
        cleaned = rule.apply(cleaned)
        if not cleaned and rule.action is RuleAction.DISCARD:
            return ""

    cleaned = _tidy(cleaned)
    if not cleaned or cleaned in SEPARATOR_TOKENS:
        return ""
    return cleaned


__all__ = ["CLEANUP_RULES", "CleanupRule", "RuleAction", "clean"]
