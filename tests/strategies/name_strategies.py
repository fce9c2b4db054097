"""
Hypothesis strategies for the flag name grammar.
"""

import string

from hypothesis import strategies as st

LETTERS = string.ascii_letters
LOWER_ALNUM = string.ascii_lowercase + string.digits


@st.composite
def valid_names(draw, max_words: int = 4):
    """
    Generate names accepted by the grammar, in mixed case.

    Names are a letter followed by letters/digits, then dash separated words.
    """
    first = draw(st.sampled_from(LETTERS))
    head = draw(st.text(alphabet=LETTERS + string.digits, max_size=8))
    words = draw(
        st.lists(
            st.text(alphabet=LETTERS + string.digits, min_size=1, max_size=8),
            max_size=max_words - 1,
        )
    )
    return "-".join([first + head] + words)


@st.composite
def invalid_names(draw):
    """Generate names breaking exactly one rule of the grammar."""
    base = draw(valid_names())
    kind = draw(
        st.sampled_from(
            ["empty", "leading-digit", "leading-dash", "trailing-dash", "double-dash", "bad-char"]
        )
    )
    if kind == "empty":
        return ""
    if kind == "leading-digit":
        return draw(st.sampled_from(string.digits)) + base
    if kind == "leading-dash":
        return "-" + base
    if kind == "trailing-dash":
        return base + "-"
    if kind == "double-dash":
        return base + "--" + draw(st.sampled_from(LETTERS))
    bad = draw(st.characters(exclude_characters=LETTERS + string.digits + "-"))
    position = draw(st.integers(min_value=1, max_value=len(base)))
    return base[:position] + bad + base[position:]
