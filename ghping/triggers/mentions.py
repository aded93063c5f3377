"""@mention extraction from comment text."""

import re
from typing import Optional

_NON_HANDLE_CHARS = re.compile(r"[^0-9a-z\-_]", re.IGNORECASE)


def extract_mentions(text: Optional[str]) -> list[str]:
    """
    Return the GitHub handles @mentioned in a comment.

    Handles come back in order of first occurrence, duplicates included.
    Punctuation glued to a handle is stripped, and an @ with nothing usable
    after it is ignored.

        >>> extract_mentions("hey @bob check @carol-x, thanks")
        ['bob', 'carol-x']
    """
    if not text or "@" not in text:
        return []

    mentions = []
    # "a @b @c d" => ["b ", "c d"]
    for snippet in text.split("@")[1:]:
        tokens = snippet.split()
        if not tokens:
            continue
        handle = _NON_HANDLE_CHARS.sub("", tokens[0])
        if handle:
            mentions.append(handle)

    return mentions
