# ============================================
# preprocessor.py - Keyword Normalization
# ============================================
# This file turns raw words into keywords:
# 1. Tokenization (splitting text on whitespace)
# 2. Stripping trailing punctuation ("word?!?!" -> "word")
# 3. Rejecting anything that is not purely alphabetic
# 4. Noise word removal (common words like "the", "is", etc.)

from typing import Iterable, FrozenSet, List, Optional


# Only these count as punctuation, and only at the END of a word.
# "wo.rd" and ".word" keep their dots and get rejected later.
PUNCTUATION = ".,?:;!"


# ============================================
# TOKENIZATION FUNCTION
# ============================================
# Raw tokens are whatever sits between whitespace, in original order.

def tokenize(text: str) -> List[str]:
    """
    Splits text into raw tokens.
    Input: "The quick, brown fox!"
    Output: ['The', 'quick,', 'brown', 'fox!']
    """
    return text.split()


# ============================================
# NOISE WORDS
# ============================================

def normalize_noise_words(entries: Iterable[str]) -> FrozenSet[str]:
    """
    Lower-cases the raw noise word entries so lookups are case-insensitive
    no matter how the source file was written.
    """
    return frozenset(entry.strip().lower() for entry in entries if entry.strip())


# ============================================
# KEYWORD TEST
# ============================================

def get_keyword(word: str, noise_words: Iterable[str] = frozenset()) -> Optional[str]:
    """
    Returns the word as a keyword (lower case, trailing punctuation stripped),
    or None if it fails the keyword test.

    Examples:
        "word!!"   -> "word"
        "Hello."   -> "hello"
        "wo.rd"    -> None   (embedded punctuation)
        "the"      -> None   (if "the" is a noise word)
    """
    word = word.rstrip(PUNCTUATION)
    if not word:
        return None

    # every remaining character must be a letter
    for char in word:
        if not char.isalpha():
            return None

    keyword = word.lower()
    if keyword in noise_words:
        return None
    return keyword

