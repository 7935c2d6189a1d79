"""
Summary: Character-encoding repair and garbled-text classification for tag text.
Why: Recover mojibake tag values before cleanup and decide when a value is beyond repair.
"""

from __future__ import annotations

import os
from typing import Final, NamedTuple

import chardet

from .errors import EncodingDetectionError

UTF8_LABEL: Final[str] = "UTF-8"
DOUBLE_ENCODED_LABEL: Final[str] = "UTF-8 (double-encoded)"

# Detector labels (upper-cased) that map to a Python codec. Anything else,
# UTF-8 and ASCII included, is left untouched.
_DECODER_TABLE: Final[dict[str, str]] = {
    "GB2312": "gb18030",
    "GB-2312": "gb18030",
    "GBK": "gb18030",
    "GB18030": "gb18030",
    "BIG5": "big5",
    "UTF-16": "utf-16",
    "UTF-16LE": "utf-16-le",
    "UTF-16BE": "utf-16-be",
    "EUC-KR": "cp949",
    "CP949": "cp949",
    "SHIFT_JIS": "cp932",
    "CP932": "cp932",
    "EUC-JP": "euc_jp",
}

_CJK_RANGES: Final[tuple[tuple[int, int], ...]] = (
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3000, 0x303F),  # CJK Symbols and Punctuation
)

_QUESTION_RATIO: Final[float] = 0.10
_PROBLEM_RATIO: Final[float] = 0.20
_MIXED_RATIO: Final[float] = 0.20
_LATIN1_RATIO: Final[float] = 0.30


class EncodingFix(NamedTuple):
    """Outcome of ``fix_encoding``."""

    text: str
    source_label: str
    changed: bool


def lookup_codec(label: str | None) -> str | None:
    """Return the Python codec for a detector label, or None when unsupported."""

    if not label:
        return None
    return _DECODER_TABLE.get(label.strip().upper())


def is_utf8_label(label: str | None) -> bool:
    return not label or label.strip().upper() == UTF8_LABEL


def text_to_bytes(text: str) -> bytes:
    """Return the byte sequence a tag value most likely came from.

    Text whose code points all fit in Latin-1 is re-encoded as Latin-1, which
    restores the raw bytes of a frame that was mis-decoded as ISO-8859-1.
    Anything wider is encoded as UTF-8.
    """
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError:
        return text.encode("utf-8", errors="surrogatepass")


def detect_charset(data: bytes) -> str:
    """Detect the charset label of ``data``.

    Raises:
        EncodingDetectionError: If the detector cannot name an encoding.
    """
    if not data:
        return UTF8_LABEL

    result = chardet.detect(data)
    encoding = result.get("encoding")
    if not encoding:
        raise EncodingDetectionError(f"No charset detected for {len(data)} bytes")
    return str(encoding)


def decode_to_utf8(data: bytes, label: str) -> str:
    """Decode ``data`` from the charset named by ``label``.

    UTF-8, an empty label and unrecognised labels pass the bytes through
    unchanged (read back as UTF-8 when valid, else Latin-1).

    Raises:
        EncodingDetectionError: If a recognised codec rejects the bytes.
    """
    codec = None if is_utf8_label(label) else lookup_codec(label)
    if codec is None:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return data.decode("latin-1")

    try:
        return data.decode(codec)
    except UnicodeDecodeError as exc:
        raise EncodingDetectionError(f"Failed to decode from {label}: {exc}") from exc


def _contains_cjk(text: str) -> bool:
    return any(low <= ord(char) <= high for char in text for low, high in _CJK_RANGES)


def fix_double_encoding(text: str) -> tuple[str, bool]:
    """Undo UTF-8 bytes that were stored one byte per character.

    Returns:
        tuple[str, bool]: The repaired text and True, or the input and False
        when the text is not double encoded CJK.
    """
    if not text or any(ord(char) > 0xFF for char in text):
        return text, False

    try:
        candidate = text.encode("latin-1").decode("utf-8")
    except UnicodeDecodeError:
        return text, False

    if not _contains_cjk(candidate):
        return text, False
    return candidate, True


def fix_encoding(text: str) -> EncodingFix:
    """Repair ``text`` trying double encoding first, then charset detection."""

    if not text:
        return EncodingFix(text, UTF8_LABEL, False)

    repaired, matched = fix_double_encoding(text)
    if matched:
        return EncodingFix(repaired, DOUBLE_ENCODED_LABEL, True)

    data = text_to_bytes(text)
    try:
        label = detect_charset(data)
        if lookup_codec(label) is None:
            return EncodingFix(text, label, False)
        converted = decode_to_utf8(data, label)
    except EncodingDetectionError:
        return EncodingFix(text, UTF8_LABEL, False)

    changed = not is_utf8_label(label) and converted != text
    return EncodingFix(converted if changed else text, label, changed)


def _has_surrogates(text: str) -> bool:
    return any(0xD800 <= ord(char) <= 0xDFFF for char in text)


def repair_path_component(name: str) -> str:
    """Decode a file or directory name from its on-disk bytes.

    Used for fallback sources; never runs the garbled check.
    """
    if not name:
        return name

    data = os.fsencode(name)
    try:
        label = detect_charset(data)
        if not is_utf8_label(label) and lookup_codec(label) is not None:
            return decode_to_utf8(data, label)
    except EncodingDetectionError:
        pass

    if _has_surrogates(name):
        return data.decode("utf-8", errors="replace")
    return name


def is_garbled(text: str) -> bool:
    """Return True when ``text`` shows statistical markers of encoding corruption."""

    if not text:
        return False

    question = replacement = invalid = unusual = latin1_extended = 0
    for char in text:
        code = ord(char)
        if char == "?":
            question += 1
        elif code == 0xFFFD:
            replacement += 1
        elif 0xD800 <= code <= 0xDFFF:
            invalid += 1

        if 0x80 <= code <= 0x9F or code in (0xD7, 0xF7) or (code < 0x20 and char not in "\n\r\t"):
            unusual += 1
        if 0xA0 < code <= 0xFF:
            latin1_extended += 1

    total = len(text)
    if question / total > _QUESTION_RATIO:
        return True
    if (question + replacement + invalid + unusual + latin1_extended) / total > _PROBLEM_RATIO:
        return True
    if (
        question > 0
        and (unusual > 0 or latin1_extended > 0)
        and (question + unusual + latin1_extended) / total > _MIXED_RATIO
    ):
        return True
    return latin1_extended / total > _LATIN1_RATIO


__all__ = [
    "DOUBLE_ENCODED_LABEL",
    "UTF8_LABEL",
    "EncodingFix",
    "decode_to_utf8",
    "detect_charset",
    "fix_double_encoding",
    "fix_encoding",
    "is_garbled",
    "is_utf8_label",
    "lookup_codec",
    "repair_path_component",
    "text_to_bytes",
]
