"""Display name decoding and filesystem-safe name composition"""

import logging

from pypinyin import Style, lazy_pinyin

from ..constants import SAFE_NAME_CHAR_PATTERN, UNICODE_ESCAPE_PATTERN

logger = logging.getLogger(__name__)

# CJK unified ideograph blocks
_CJK_RANGES = (
    (0x3400, 0x4DBF),    # Extension A
    (0x4E00, 0x9FFF),    # Unified Ideographs
    (0xF900, 0xFAFF),    # Compatibility Ideographs
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2EBEF),  # Extensions C-F
    (0x30000, 0x3134F),  # Extension G
)


def is_cjk_ideograph(char: str) -> bool:
    """Check if a single character is a CJK ideograph"""
    code = ord(char)
    return any(start <= code <= end for start, end in _CJK_RANGES)


def decode_unicode_escapes(text: str) -> str:
    """
    Decode literal \\uXXXX sequences and trim surrounding whitespace

    Malformed sequences are left untouched.

    Args:
        text: Display string, possibly containing escaped characters

    Returns:
        Decoded and trimmed string
    """
    if not text:
        return ""
    decoded = UNICODE_ESCAPE_PATTERN.sub(lambda m: chr(int(m.group(1), 16)), text)
    return decoded.strip()


def _safe_chars(text: str) -> str:
    return "".join(c if SAFE_NAME_CHAR_PATTERN.fullmatch(c) else "_" for c in text)


def file_name_part(text: str) -> str:
    """Decoded text usable inside a single file name; path separators become '_'"""
    return decode_unicode_escapes(text).replace("/", "_").replace("\\", "_")


def compose_name(text: str) -> str:
    """
    Convert a display name into a filesystem/identifier-safe name

    CJK ideographs become lowercase pinyin, characters in
    [a-zA-Z0-9._-] are kept and everything else becomes '_'.

    Args:
        text: Display string

    Returns:
        Safe name
    """
    decoded = decode_unicode_escapes(text)

    parts = []
    for char in decoded:
        if is_cjk_ideograph(char):
            parts.append(_safe_chars("".join(lazy_pinyin(char, style=Style.NORMAL)).lower()))
        elif SAFE_NAME_CHAR_PATTERN.fullmatch(char):
            parts.append(char)
        else:
            parts.append("_")

    result = "".join(parts)
    logger.debug(f"Composed name {decoded!r} -> {result!r}")
    return result
