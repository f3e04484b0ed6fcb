"""Tests for pincel.window — viewport windowing and front trimming."""

from hypothesis import given, settings
from hypothesis import strategies as st

from pincel import Run, char_width, merge_runs, run_width, text_width, trim, window

HELLO = [Run("hi"), Run("hello", "foo")]


class TestWidths:
    def test_ascii(self) -> None:
        assert char_width("a") == 1
        assert text_width("hello") == 5

    def test_wide(self) -> None:
        assert char_width("你") == 2
        assert char_width("Ａ") == 2
        assert text_width("te你st") == 6

    def test_combining(self) -> None:
        assert char_width("\u0301") == 0
        assert text_width("e\u0301") == 1

    def test_run_width(self) -> None:
        assert run_width(HELLO) == 7


class TestTrim:
    def test_inside_first_tagged_run(self) -> None:
        runs = [Run("hello", "foo"), Run("lol")]
        assert trim(runs, 3) == [Run("lo", "foo"), Run("lol")]

    def test_leaves_last_char(self) -> None:
        assert trim([Run("hello", "foo")], 4) == [Run("o", "foo")]

    def test_zero_is_identity(self) -> None:
        assert trim([Run("hello", "foo")], 0) == [Run("hello", "foo")]

    def test_past_the_end(self) -> None:
        assert trim([Run("hello", "foo")], 10) == []

    def test_inside_plain_run(self) -> None:
        assert trim(HELLO, 1) == [Run("i"), Run("hello", "foo")]

    def test_into_tagged_run(self) -> None:
        assert trim(HELLO, 3) == [Run("ello", "foo")]

    def test_exactly_at_boundary(self) -> None:
        assert trim(HELLO, 2) == [Run("hello", "foo")]

    def test_drops_whole_runs(self) -> None:
        assert trim([*HELLO, Run("test")], 7) == [Run("test")]

    def test_split_wide_char_in_plain_run(self) -> None:
        assert trim([*HELLO, Run("te你st")], 10) == [Run(" st")]

    def test_split_wide_char_keeps_tag(self) -> None:
        assert trim([Run("hi"), Run("he你llo", "foo")], 5) == [Run(" llo", "foo")]

    def test_empty(self) -> None:
        assert trim([], 9) == []

    def test_negative_start(self) -> None:
        assert trim(HELLO, -3) == HELLO


class TestWindow:
    def test_basic(self) -> None:
        assert window(HELLO, 1, 4) == [Run("i"), Run("hel", "foo")]

    def test_pads_short_line(self) -> None:
        assert window([Run("ab")], 0, 5) == [Run("ab   ")]
        assert window([Run("ab", "k")], 1, 3) == [Run("b", "k"), Run("  ")]

    def test_start_past_end(self) -> None:
        assert window([Run("ab", "k")], 5, 3) == [Run("   ")]

    def test_non_positive_length(self) -> None:
        assert window(HELLO, 0, 0) == []
        assert window(HELLO, 0, -2) == []

    def test_wide_char_at_right_edge(self) -> None:
        assert window([Run("a你", "k")], 0, 2) == [Run("a ", "k")]

    def test_wide_char_at_left_edge(self) -> None:
        assert window([Run("你b", "k")], 1, 2) == [Run(" b", "k")]

    def test_combining_mark_follows_base(self) -> None:
        assert window([Run("e\u0301x")], 0, 1) == [Run("e\u0301")]
        assert window([Run("e\u0301x")], 1, 1) == [Run("x")]

    def test_tabs(self) -> None:
        assert window([Run("\tx", "k")], 2, 4) == [Run("  x", "k"), Run(" ")]
        assert window([Run("\tx", "k")], 0, 3, tab_width=2) == [Run("  x", "k")]

    def test_output_is_merged(self) -> None:
        runs = [Run("a", "k"), Run("b", "k"), Run(""), Run("c")]
        assert window(runs, 0, 3) == [Run("ab", "k"), Run("c")]


class TestMergeRuns:
    def test_merges_and_drops_empty(self) -> None:
        runs = [Run("a"), Run(""), Run("b"), Run("c", "k"), Run("d", "k")]
        assert merge_runs(runs) == [Run("ab"), Run("cd", "k")]


run_text = st.text(alphabet="ab 你\te\u0301", max_size=8)
run_lists = st.lists(st.tuples(run_text, st.sampled_from([None, "k", "s"])), max_size=6)
ascii_runs = st.lists(
    st.tuples(st.text(alphabet="abc ", max_size=8), st.sampled_from([None, "k", "s"])),
    max_size=6,
)


class TestWindowProperties:
    @given(runs=run_lists, start=st.integers(-3, 40), length=st.integers(1, 30))
    @settings(max_examples=200)
    def test_width_is_exactly_length(self, runs, start: int, length: int) -> None:
        result = window([Run(t, k) for t, k in runs], start, length)
        assert run_width(result) == length
        assert all("\t" not in run.text for run in result)

    @given(
        runs=ascii_runs,
        start=st.integers(0, 30),
        left=st.integers(1, 15),
        right=st.integers(1, 15),
    )
    @settings(max_examples=200)
    def test_adjacent_windows_concatenate(self, runs, start: int, left: int, right: int) -> None:
        runs = [Run(t, k) for t, k in runs]
        joined = merge_runs(window(runs, start, left) + window(runs, start + left, right))
        assert joined == window(runs, start, left + right)

    @given(runs=ascii_runs, start=st.integers(0, 30))
    @settings(max_examples=100)
    def test_trim_is_unbounded_window(self, runs, start: int) -> None:
        runs = [Run(t, k) for t, k in runs]
        trimmed = trim(runs, start)
        width = run_width(runs) - start
        if width > 0:
            assert trimmed == window(runs, start, width)
        else:
            assert trimmed == []
