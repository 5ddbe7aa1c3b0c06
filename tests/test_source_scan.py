"""Tests for quote-aware source scanning helpers."""

from rwsdk_tools.core.source_scan import (
    blank_spans,
    find_matching_bracket,
    find_matching_paren,
    mask_comments,
)


class TestFindMatchingBracket:
    """Tests for find_matching_bracket."""

    def test_flat(self) -> None:
        text = "[a, b] tail"
        assert find_matching_bracket(text, 1) == 5

    def test_nested(self) -> None:
        text = "[a, [b, [c]], d]"
        assert find_matching_bracket(text, 1) == len(text) - 1

    def test_brackets_in_strings_are_ignored(self) -> None:
        text = """["]", ']', `[`, x]"""
        assert find_matching_bracket(text, 1) == len(text) - 1

    def test_brackets_in_comments_are_ignored(self) -> None:
        text = "[a, // ]\n b /* ] */]"
        assert find_matching_bracket(text, 1) == len(text) - 1

    def test_escaped_quote_inside_string(self) -> None:
        text = r'["a\"]", b]'
        assert find_matching_bracket(text, 1) == len(text) - 1

    def test_unmatched_apostrophe_is_plain_text(self) -> None:
        text = "[<p>Don't</p>], tail"
        assert find_matching_bracket(text, 1) == text.index("]")

    def test_unmatched_quote_on_last_line_is_plain_text(self) -> None:
        text = '[say "hi]'
        assert find_matching_bracket(text, 1) == len(text) - 1

    def test_unclosed_returns_text_length(self) -> None:
        text = "[a, [b]"
        assert find_matching_bracket(text, 1) == len(text)


class TestFindMatchingParen:
    """Tests for find_matching_paren."""

    def test_call_arguments(self) -> None:
        text = 'create({ data: { name: "(x" } }) ;'
        end = find_matching_paren(text, len("create("))
        assert text[end] == ")"
        assert text[end + 1:] == " ;"


class TestMaskComments:
    """Tests for mask_comments."""

    def test_line_and_block_comments_blanked(self) -> None:
        text = 'a // route("/x")\nb /* c\nd */ e'
        masked = mask_comments(text)
        assert len(masked) == len(text)
        assert "route" not in masked
        assert masked.count("\n") == text.count("\n")
        assert masked.startswith("a ")
        assert masked.endswith(" e")

    def test_slashes_inside_strings_kept(self) -> None:
        text = 'fetch("https://example.com") // trailing'
        assert mask_comments(text).rstrip() == 'fetch("https://example.com")'

    def test_comment_after_unmatched_apostrophe_is_masked(self) -> None:
        text = "<p>Don't</p> // route(\"/x\")\nnext"
        masked = mask_comments(text)
        assert "route" not in masked
        assert masked.endswith("\nnext")

    def test_no_comments_unchanged(self) -> None:
        text = 'route("/a", A)'
        assert mask_comments(text) == text


class TestBlankSpans:
    """Tests for blank_spans."""

    def test_blanks_keep_newlines(self) -> None:
        assert blank_spans("ab\ncd", [(1, 4)]) == "a \n d"

    def test_span_past_end_is_clamped(self) -> None:
        assert blank_spans("abc", [(1, 10)]) == "a  "
