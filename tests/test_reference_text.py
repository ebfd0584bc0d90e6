import pytest

from services.reference_text import (
    IGNORED_CHARACTERS,
    normalize_char,
    normalize_reference,
    split_lines,
)

SONG = (
    "\n"
    "Twinkle, twinkle, little star,\n"
    "How I wonder what you are!\n"
    "\n"
    "Up above the world so high;\r\n"
    "Like a diamond in the sky.\n"
)


def _non_decreasing(values) -> bool:
    return all(a <= b for a, b in zip(values, values[1:]))


def test_punctuation_and_case_are_folded():
    ref = normalize_reference("Héllo, World")
    assert ref.normalized_text == "héllo world"
    # the collapsed space points at the comma that started the run
    assert ref.index_to_source_offset == (0, 1, 2, 3, 4, 5, 7, 8, 9, 10, 11)
    assert ref.index_to_line == (0,) * 11
    assert ref.lines == ("Héllo, World",)


def test_lines_are_kept_verbatim():
    ref = normalize_reference("h\ne\n\nl\nlo")
    assert list(ref.lines) == ["h", "e", "", "l", "lo"]
    assert ref.normalized_text == "h e l lo"
    assert ref.index_to_line == (0, 0, 1, 1, 3, 3, 4, 4)


def test_already_normalized_text_maps_to_itself():
    text = "twinkle twinkle little star how i wonder"
    ref = normalize_reference(text)
    assert ref.normalized_text == text
    assert ref.index_to_source_offset == tuple(range(len(text)))
    assert ref.index_to_line == (0,) * len(text)


def test_maps_are_monotonic_and_aligned():
    ref = normalize_reference(SONG)
    n = len(ref.normalized_text)
    assert len(ref.index_to_source_offset) == n
    assert len(ref.index_to_line) == n
    assert _non_decreasing(ref.index_to_source_offset)
    assert _non_decreasing(ref.index_to_line)
    assert ref.normalized_text.startswith("twinkle twinkle little star how")
    assert ref.normalized_text.endswith("in the sky")
    assert "  " not in ref.normalized_text


def test_map_points_back_at_the_source_character():
    ref = normalize_reference(SONG)
    for index, ch in enumerate(ref.normalized_text):
        source = SONG[ref.index_to_source_offset[index]]
        if ch == " ":
            assert source == " " or source in IGNORED_CHARACTERS
        else:
            assert source.lower() == ch


def test_line_numbers_follow_line_breaks():
    ref = normalize_reference(SONG)
    up = ref.normalized_text.index("up above")
    assert ref.index_to_line[up] == 4
    assert ref.lines[4] == "Up above the world so high;"
    assert ref.line_count == 6


def test_leading_and_trailing_separators_are_dropped():
    ref = normalize_reference("  ...Hi!\n")
    assert ref.normalized_text == "hi"
    assert ref.index_to_source_offset == (5, 6)


def test_crlf_counts_as_one_line_break():
    ref = normalize_reference("a\r\nb")
    assert ref.normalized_text == "a b"
    assert ref.index_to_source_offset == (0, 1, 3)
    assert ref.index_to_line == (0, 0, 1)
    assert ref.lines == ("a", "b")


def test_multi_character_lowercase_gets_one_entry_per_character():
    ref = normalize_reference("xİ")
    assert ref.normalized_text == "x" + "İ".lower()
    assert len(ref.normalized_text) == 3
    assert ref.index_to_source_offset == (0, 1, 1)
    assert ref.index_to_line == (0, 0, 0)


def test_empty_text():
    ref = normalize_reference("")
    assert ref.is_empty
    assert ref.normalized_text == ""
    assert ref.lines == ()
    assert ref.source_length == 0


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("\n", [""]),
        ("a\n", ["a"]),
        ("a\n\n", ["a", ""]),
        ("a\r\nb\r\n", ["a", "b"]),
    ],
)
def test_split_lines(text, expected):
    assert split_lines(text) == expected


@pytest.mark.parametrize(
    "ch, expected",
    [(" ", " "), ("\n", " "), ("!", " "), ("\r", " "), ("A", "a"), ("é", "é"), ("-", "-")],
)
def test_normalize_char(ch, expected):
    assert normalize_char(ch) == expected
