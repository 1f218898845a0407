# ============================================================================
# COMMENT NORMALIZER
# ============================================================================
# STATUS: Core - Comment text cleanup
# PURPOSE: Strip incidental indentation from comments written as indented blocks
# CREATED: 19 OCT 2026
# EXPORTS: normalize_comment
# ============================================================================
"""
Comment Normalizer

Lets comments be written as indented triple-quoted strings inside migration
code without the indentation ending up in the database:

    USERS_COMMENT = '''
        Registered users.

        One row per account, including deactivated ones.
        '''

    with repo.create_table("users", comment=USERS_COMMENT) as t:
        ...

Two rules are applied:

1. Empty lines (no characters at all, not even whitespace) are removed from
   the start and the end of the text.
2. The whitespace in front of the first line (the "lede") is removed once from
   the start of every line that begins with it. Lines indented with different
   whitespace are left alone.

Trailing empty lines are removed again after the lede is stripped, so a
closing line that held only the lede (the indented closing quotes above)
disappears too. Normalizing an already normalized comment changes nothing.

Start the text on the line after the opening quotes. If the first line has no
leading whitespace, nothing is stripped from the lines that follow.
"""

import re

_LEADING_EMPTY_LINES = re.compile(r"\A\n+")
_TRAILING_EMPTY_LINES = re.compile(r"\n+\Z")
_LEDE = re.compile(r"\A\s+")


def normalize_comment(comment: str) -> str:
    """
    Strip leading/trailing empty lines and the common indentation lede.

    Args:
        comment: Raw comment text

    Returns:
        The normalized comment (possibly empty)

    Example:
        >>> normalize_comment("\\n  foo\\n    bar\\n  baz\\n")
        'foo\\n  bar\\nbaz'
    """
    text = _LEADING_EMPTY_LINES.sub("", comment)

    match = _LEDE.match(text)
    if match:
        lede = re.compile("^" + re.escape(match.group(0)), re.MULTILINE)
        text = lede.sub("", text)

    # Stripping the lede can leave an indented last line empty
    return _TRAILING_EMPTY_LINES.sub("", text)


__all__ = ["normalize_comment"]
