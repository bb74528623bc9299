import pytest

from gkgraph.options import ArgKind, LongMatch, LongOption, match_long_option

OPTS = [
    LongOption("verbose", ArgKind.NONE, "v"),
    LongOption("version", ArgKind.NONE, "V"),
    LongOption("output", ArgKind.REQUIRED, "o"),
    LongOption("out", ArgKind.OPTIONAL, "O"),
]


def test_exact_match():
    match = match_long_option(OPTS, "verbose")
    assert match == LongMatch(0, OPTS[0], None, True)


def test_unique_abbreviation():
    match = match_long_option(OPTS, "outp")
    assert match.index == 2
    assert match.option is OPTS[2]
    assert match.exact is False


def test_exact_beats_longer_prefix_match():
    match = match_long_option(OPTS, "out")
    assert match.index == 3
    assert match.exact is True


def test_ambiguous_prefix_raises():
    with pytest.raises(ValueError):
        match_long_option(OPTS, "ver")


def test_argument_after_equals():
    match = match_long_option(OPTS, "output=file.txt")
    assert match.option.name == "output"
    assert match.argument == "file.txt"


def test_empty_argument_differs_from_none():
    assert match_long_option(OPTS, "output=").argument == ""
    assert match_long_option(OPTS, "output").argument is None


def test_no_match_returns_none():
    assert match_long_option(OPTS, "missing") is None


def test_identical_definitions_not_ambiguous():
    opts = [LongOption("alpha", ArgKind.NONE, "a"), LongOption("alps", ArgKind.NONE, "a")]
    match = match_long_option(opts, "al")
    assert match.index == 0


def test_identical_definitions_ambiguous_when_long_only():
    opts = [LongOption("alpha", ArgKind.NONE, "a"), LongOption("alps", ArgKind.NONE, "a")]
    with pytest.raises(ValueError):
        match_long_option(opts, "al", long_only=True)


def test_has_arg_coerced_to_enum():
    option = LongOption("size", 1, "s")
    assert option.has_arg is ArgKind.REQUIRED


def test_empty_name_rejected():
    with pytest.raises(ValueError):
        LongOption("")