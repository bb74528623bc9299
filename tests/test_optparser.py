import pytest

from gkgraph.options import ArgKind, LongOption
from gkgraph.optparser import (
    NONOPTION,
    OptionParser,
    Ordering,
    getopt,
    getopt_long,
    getopt_long_only,
)


@pytest.fixture(autouse=True)
def _no_posix(monkeypatch):
    monkeypatch.delenv("POSIXLY_CORRECT", raising=False)


LONGOPTS = [
    LongOption("verbose", ArgKind.NONE, "v"),
    LongOption("output", ArgKind.REQUIRED, "o"),
]


def test_basic_short_options():
    opts, rest = getopt(["prog", "-a", "-b", "val", "file"], "ab:")
    assert opts == [("a", None), ("b", "val")]
    assert rest == ["file"]


def test_permute_moves_nonoptions_last():
    opts, rest = getopt(["prog", "x", "-a", "y", "-b", "z"], "ab")
    assert opts == [("a", None), ("b", None)]
    assert rest == ["x", "y", "z"]


def test_caller_argv_not_modified():
    argv = ["prog", "x", "-a"]
    getopt(argv, "a")
    assert argv == ["prog", "x", "-a"]


def test_require_order_stops_at_nonoption():
    parser = OptionParser(["prog", "x", "-a"], "+a")
    assert parser.ordering is Ordering.REQUIRE_ORDER
    assert list(parser) == []
    assert parser.remaining() == ["x", "-a"]


def test_return_in_order():
    opts, rest = getopt(["prog", "x", "-a", "y"], "-a")
    assert opts == [(NONOPTION, "x"), ("a", None), (NONOPTION, "y")]
    assert rest == []


def test_double_dash_ends_options():
    opts, rest = getopt(["prog", "-a", "--", "-b"], "ab")
    assert opts == [("a", None)]
    assert rest == ["-b"]


def test_clustered_options():
    opts, rest = getopt(["prog", "-abc"], "abc")
    assert opts == [("a", None), ("b", None), ("c", None)]
    assert rest == []


def test_attached_required_argument():
    opts, _ = getopt(["prog", "-bval"], "b:")
    assert opts == [("b", "val")]


def test_optional_argument():
    opts, rest = getopt(["prog", "-cx", "-c", "y"], "c::")
    assert opts == [("c", "x"), ("c", None)]
    assert rest == ["y"]


def test_missing_required_argument(capsys):
    parser = OptionParser(["prog", "-b"], "b:")
    assert parser.next_option() == ("?", None)
    assert parser.optopt == "b"
    assert "option requires an argument -- b" in capsys.readouterr().err


def test_missing_argument_colon_mode_is_silent(capsys):
    parser = OptionParser(["prog", "-b"], ":b:")
    assert parser.next_option() == (":", None)
    assert capsys.readouterr().err == ""


def test_unknown_option(capsys):
    parser = OptionParser(["prog", "-z"], "a")
    assert parser.next_option() == ("?", None)
    assert parser.optopt == "z"
    assert "invalid option -- z" in capsys.readouterr().err


def test_unknown_option_quiet(capsys):
    parser = OptionParser(["prog", "-z"], "a", opterr=False)
    assert parser.next_option() == ("?", None)
    assert capsys.readouterr().err == ""


def test_posixly_correct(monkeypatch, capsys):
    monkeypatch.setenv("POSIXLY_CORRECT", "1")
    parser = OptionParser(["prog", "x", "-a"], "a")
    assert parser.ordering is Ordering.REQUIRE_ORDER
    assert list(parser) == []
    parser = OptionParser(["prog", "-z"], "a")
    assert parser.next_option() == ("?", None)
    assert "illegal option -- z" in capsys.readouterr().err


def test_long_options():
    opts, rest = getopt_long(
        ["prog", "--verbose", "--output=f", "--out", "g", "tail"], "vo:", LONGOPTS
    )
    assert opts == [("v", None), ("o", "f"), ("o", "g")]
    assert rest == ["tail"]


def test_long_option_index():
    parser = OptionParser(["prog", "--output", "f"], "", LONGOPTS)
    assert parser.next_option() == ("o", "f")
    assert parser.longind == 1


def test_long_option_sets_flag():
    longopts = [LongOption("debug", ArgKind.NONE, 1, flag="debug")]
    parser = OptionParser(["prog", "--debug"], "", longopts)
    assert parser.next_option() == (0, None)
    assert parser.flags == {"debug": 1}


def test_ambiguous_long_option(capsys):
    longopts = [LongOption("verbose", val="v"), LongOption("version", val="V")]
    parser = OptionParser(["prog", "--ver", "x"], "", longopts)
    assert parser.next_option() == ("?", None)
    assert "ambiguous" in capsys.readouterr().err


def test_long_option_rejects_argument(capsys):
    parser = OptionParser(["prog", "--verbose=x"], "", LONGOPTS)
    assert parser.next_option() == ("?", None)
    assert parser.optopt == "v"
    assert "doesn't allow an argument" in capsys.readouterr().err


def test_long_option_missing_argument(capsys):
    parser = OptionParser(["prog", "--output"], "", LONGOPTS)
    assert parser.next_option() == ("?", None)
    assert "requires an argument" in capsys.readouterr().err


def test_unrecognized_long_option(capsys):
    parser = OptionParser(["prog", "--nope"], "", LONGOPTS)
    assert parser.next_option() == ("?", None)
    assert "unrecognized option `--nope'" in capsys.readouterr().err


def test_long_only():
    longopts = [LongOption("verbose", ArgKind.NONE, 100)]
    assert getopt_long_only(["prog", "-verbose"], "", longopts)[0] == [(100, None)]
    assert getopt_long_only(["prog", "-v"], "v", longopts)[0] == [("v", None)]
    assert getopt_long_only(["prog", "-v"], "", longopts)[0] == [(100, None)]


def test_w_semicolon_long_option():
    opts, _ = getopt_long(["prog", "-W", "output=f"], "W;", LONGOPTS)
    assert opts == [("o", "f")]


def test_w_semicolon_unknown_name():
    opts, _ = getopt_long(["prog", "-W", "foo"], "W;", LONGOPTS)
    assert opts == [("W", "foo")]


def test_iteration_matches_getopt():
    argv = ["prog", "-a", "x", "-b", "v"]
    parser = OptionParser(argv, "ab:")
    assert list(parser) == getopt(argv, "ab:")[0]
    assert parser.remaining() == ["x"]