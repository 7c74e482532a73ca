# -*- coding: utf-8 -*-
"""
Text Normalization - Canonical search keys for catalog metadata.

Folds letter case, full-width ASCII, the ideographic space, and
Katakana into a single form so that strings that look equivalent to a
Japanese reader compare equal. The same function is applied when the
search index is built and when a query is parsed.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

_FULLWIDTH_FIRST = 0xFF01
_FULLWIDTH_LAST = 0xFF5E
_FULLWIDTH_OFFSET = 0xFEE0

_IDEOGRAPHIC_SPACE = 0x3000

_KATAKANA_FIRST = 0x30A1
_KATAKANA_LAST = 0x30F6
_KANA_OFFSET = 0x60


def normalize(s: str) -> str:
    """Normalize a string for indexing and querying.

    Trims and lowercases ``s``, then maps full-width ASCII
    (U+FF01-U+FF5E) to half-width, the ideographic space (U+3000) to
    a regular space, and Katakana (U+30A1-U+30F6) to Hiragana. All
    other characters pass through unchanged.

    Parameters
    ----------
    s : str
        Raw text.

    Returns
    -------
    str
        Normalized text. Applying ``normalize`` again is a no-op.
    """
    out = []
    for ch in s.strip().lower():
        code = ord(ch)
        if _FULLWIDTH_FIRST <= code <= _FULLWIDTH_LAST:
            # Full-width capitals map into A-Z, fold them again
            out.append(chr(code - _FULLWIDTH_OFFSET).lower())
        elif code == _IDEOGRAPHIC_SPACE:
            out.append(' ')
        elif _KATAKANA_FIRST <= code <= _KATAKANA_LAST:
            out.append(chr(code - _KANA_OFFSET))
        else:
            out.append(ch)
    return ''.join(out)
