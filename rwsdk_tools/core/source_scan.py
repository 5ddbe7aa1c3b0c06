"""Quote-aware scanning helpers for JavaScript/TypeScript source text.

These helpers never build an AST. They only know enough about string
literals and comments to keep bracket counting and regex scans from being
fooled by text inside them.
"""

from __future__ import annotations

_QUOTES = ("'", '"', "`")


def skip_string(text: str, index: int) -> int:
    """Return the index just past the string literal starting at *index*.

    A ``'`` or ``"`` with no closing quote on its line is not a string (an
    apostrophe in JSX text such as ``<p>Don't</p>``). The index just past
    that quote is returned, so scanning continues on the same line.
    """
    quote = text[index]
    i = index + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n" and quote != "`":
            return index + 1
        i += 1
    if quote != "`":
        return index + 1
    return len(text)


def skip_comment(text: str, index: int) -> int | None:
    """Return the index past a comment starting at *index*, or None."""
    if text.startswith("//", index):
        end = text.find("\n", index)
        return len(text) if end == -1 else end
    if text.startswith("/*", index):
        end = text.find("*/", index + 2)
        return len(text) if end == -1 else end + 2
    return None


def mask_comments(text: str) -> str:
    """Replace ``//`` and ``/* */`` comments outside strings with spaces.

    Newlines inside block comments are kept, so indices and line numbers
    in the masked text match the original.
    """
    chunks: list[str] = []
    i = 0
    start = 0
    while i < len(text):
        char = text[i]
        if char in _QUOTES:
            i = skip_string(text, i)
            continue
        comment_end = skip_comment(text, i)
        if comment_end is not None:
            chunks.append(text[start:i])
            chunks.append(
                "".join("\n" if c == "\n" else " " for c in text[i:comment_end])
            )
            i = start = comment_end
            continue
        i += 1
    chunks.append(text[start:])
    return "".join(chunks)


def find_closing(text: str, start: int, opening: str, closing: str) -> int:
    """Find the index of the *closing* char matching an already-open pair.

    *start* is the index just after the opening character. Depth counting
    ignores brackets inside string literals and comments.

    Returns:
        Index of the matching closing character, or ``len(text)`` when the
        pair is never closed.
    """
    depth = 1
    i = start
    while i < len(text):
        char = text[i]
        if char in _QUOTES:
            i = skip_string(text, i)
            continue
        comment_end = skip_comment(text, i)
        if comment_end is not None:
            i = comment_end
            continue
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return len(text)


def find_matching_bracket(text: str, start: int) -> int:
    """Return the index of the ``]`` closing the ``[`` just before *start*."""
    return find_closing(text, start, "[", "]")


def find_matching_paren(text: str, start: int) -> int:
    """Return the index of the ``)`` closing the ``(`` just before *start*."""
    return find_closing(text, start, "(", ")")


def blank_spans(text: str, spans: list[tuple[int, int]]) -> str:
    """Replace each ``[start, end)`` span of *text* with spaces."""
    if not spans:
        return text
    chars = list(text)
    for begin, end in spans:
        for i in range(begin, min(end, len(chars))):
            if chars[i] != "\n":
                chars[i] = " "
    return "".join(chars)
