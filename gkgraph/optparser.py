"""Command-line option parsing in the manner of GNU getopt, with long options."""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Iterator, Sequence
from typing import Union

from gkgraph.options import ArgKind, LongOption, match_long_option

#: Option code reported for a non-option argument in RETURN_IN_ORDER mode.
NONOPTION = "\x01"

OptCode = Union[str, int]
Result = tuple[OptCode, Union[str, None]]


class Ordering(enum.Enum):
    """How options that follow non-option arguments are treated."""

    REQUIRE_ORDER = 0
    PERMUTE = 1
    RETURN_IN_ORDER = 2


def _is_nonoption(arg: str) -> bool:
    return not arg.startswith("-") or arg == "-"


class OptionParser:
    """A stateful option scanner over a copy of ``argv``.

    Each call to :meth:`next_option` returns ``(code, optarg)`` or None when
    the options are exhausted. ``code`` is the option character for a short
    option, the ``val`` of a long option (0 when it sets a flag), ``"?"`` or
    ``":"`` for an error and :data:`NONOPTION` for an argument returned in
    order. In PERMUTE mode ``argv`` is reordered so that non-options come last.
    """

    def __init__(
        self,
        argv: Sequence[str],
        optstring: str,
        longopts: Union[Sequence[LongOption], None] = None,
        long_only: bool = False,
        opterr: bool = True,
    ) -> None:
        self.argv = list(argv)
        self.longopts = tuple(longopts) if longopts is not None else None
        self.long_only = long_only
        self.opterr = opterr
        self.optind = 1
        self.optarg: Union[str, None] = None
        self.optopt: OptCode = "?"
        self.longind: Union[int, None] = None
        self.flags: dict[str, OptCode] = {}
        self.posixly_correct = os.environ.get("POSIXLY_CORRECT")

        if optstring.startswith("-"):
            self.ordering = Ordering.RETURN_IN_ORDER
            optstring = optstring[1:]
        elif optstring.startswith("+"):
            self.ordering = Ordering.REQUIRE_ORDER
            optstring = optstring[1:]
        elif self.posixly_correct is not None:
            self.ordering = Ordering.REQUIRE_ORDER
        else:
            self.ordering = Ordering.PERMUTE
        self._optstring = optstring
        self._colon = optstring.startswith(":")

        self._nextchar: Union[str, None] = None
        self._first_nonopt = self.optind
        self._last_nonopt = self.optind

    def _error(self, message: str) -> None:
        if self.opterr and not self._colon:
            prog = self.argv[0] if self.argv else ""
            print(f"{prog}: {message}", file=sys.stderr)

    def _missing(self) -> str:
        return ":" if self._colon else "?"

    def _exchange(self) -> None:
        lo, mid, hi = self._first_nonopt, self._last_nonopt, self.optind
        self.argv[lo:hi] = self.argv[mid:hi] + self.argv[lo:mid]
        self._first_nonopt += hi - mid
        self._last_nonopt = hi

    def _finish_long(self, index: int, option: LongOption) -> Result:
        self._nextchar = ""
        self.longind = index
        if option.flag is not None:
            self.flags[option.flag] = option.val
            return (0, self.optarg)
        return (option.val, self.optarg)

    def _advance(self) -> Union[Result, None, bool]:
        """Move to the next argv element; True means an option element is ready."""
        argv = self.argv
        argc = len(argv)
        if self._last_nonopt > self.optind:
            self._last_nonopt = self.optind
        if self._first_nonopt > self.optind:
            self._first_nonopt = self.optind

        if self.ordering is Ordering.PERMUTE:
            if self._first_nonopt != self._last_nonopt and self._last_nonopt != self.optind:
                self._exchange()
            elif self._last_nonopt != self.optind:
                self._first_nonopt = self.optind
            while self.optind < argc and _is_nonoption(argv[self.optind]):
                self.optind += 1
            self._last_nonopt = self.optind

        if self.optind != argc and argv[self.optind] == "--":
            self.optind += 1
            if self._first_nonopt != self._last_nonopt and self._last_nonopt != self.optind:
                self._exchange()
            elif self._first_nonopt == self._last_nonopt:
                self._first_nonopt = self.optind
            self._last_nonopt = argc
            self.optind = argc

        if self.optind == argc:
            if self._first_nonopt != self._last_nonopt:
                self.optind = self._first_nonopt
            return None

        if _is_nonoption(argv[self.optind]):
            if self.ordering is Ordering.REQUIRE_ORDER:
                return None
            self.optarg = argv[self.optind]
            self.optind += 1
            return (NONOPTION, self.optarg)

        current = argv[self.optind]
        skip = 2 if self.longopts is not None and current[1] == "-" else 1
        self._nextchar = current[skip:]
        return True

    def _long_option(self, current: str) -> Union[Result, None]:
        argv = self.argv
        argc = len(argv)
        assert self.longopts is not None and self._nextchar is not None
        try:
            match = match_long_option(self.longopts, self._nextchar, self.long_only)
        except ValueError:
            self._error(f"option `{current}' is ambiguous")
            self._nextchar = ""
            self.optind += 1
            self.optopt = 0
            return ("?", None)

        if match is not None:
            option = match.option
            self.optind += 1
            if match.argument is not None:
                if option.has_arg != ArgKind.NONE:
                    self.optarg = match.argument
                else:
                    if current[1] == "-":
                        self._error(f"option `--{option.name}' doesn't allow an argument")
                    else:
                        self._error(
                            f"option `{current[0]}{option.name}' doesn't allow an argument"
                        )
                    self._nextchar = ""
                    self.optopt = option.val
                    return ("?", None)
            elif option.has_arg == ArgKind.REQUIRED:
                if self.optind < argc:
                    self.optarg = argv[self.optind]
                    self.optind += 1
                else:
                    self._error(f"option `{current}' requires an argument")
                    self._nextchar = ""
                    self.optopt = option.val
                    return (self._missing(), None)
            return self._finish_long(match.index, option)

        if (
            not self.long_only
            or current[1] == "-"
            or not self._nextchar
            or self._nextchar[0] not in self._optstring
        ):
            if current[1] == "-":
                self._error(f"unrecognized option `--{self._nextchar}'")
            else:
                self._error(f"unrecognized option `{current[0]}{self._nextchar}'")
            self._nextchar = ""
            self.optind += 1
            self.optopt = 0
            return ("?", None)
        return None

    def _w_option(self, c: str) -> Result:
        argv = self.argv
        argc = len(argv)
        if self._nextchar:
            self.optarg = self._nextchar
            self.optind += 1
        elif self.optind == argc:
            self._error(f"option requires an argument -- {c}")
            self.optopt = c
            return (self._missing(), None)
        else:
            self.optarg = argv[self.optind]
            self.optind += 1

        text = self.optarg
        try:
            match = match_long_option(self.longopts or (), text, True)
        except ValueError:
            self._error(f"option `-W {text}' is ambiguous")
            self._nextchar = ""
            self.optind += 1
            return ("?", None)

        if match is None:
            self._nextchar = None
            return ("W", self.optarg)

        option = match.option
        if match.argument is not None:
            if option.has_arg != ArgKind.NONE:
                self.optarg = match.argument
            else:
                self._error(f"option `-W {option.name}' doesn't allow an argument")
                self._nextchar = ""
                return ("?", None)
        elif option.has_arg == ArgKind.REQUIRED:
            if self.optind < argc:
                self.optarg = argv[self.optind]
                self.optind += 1
            else:
                self._error(f"option `{argv[self.optind - 1]}' requires an argument")
                self._nextchar = ""
                return (self._missing(), None)
        return self._finish_long(match.index, option)

    def _short_option(self) -> Result:
        argv = self.argv
        argc = len(argv)
        assert self._nextchar
        c = self._nextchar[0]
        self._nextchar = self._nextchar[1:]
        pos = self._optstring.find(c)

        if not self._nextchar:
            self.optind += 1

        if pos < 0 or c == ":":
            word = "illegal" if self.posixly_correct else "invalid"
            self._error(f"{word} option -- {c}")
            self.optopt = c
            return ("?", None)

        spec = self._optstring[pos:]
        if spec.startswith("W;"):
            return self._w_option(c)

        code = c
        if spec[1:2] == ":":
            if spec[2:3] == ":":
                if self._nextchar:
                    self.optarg = self._nextchar
                    self.optind += 1
                else:
                    self.optarg = None
            else:
                if self._nextchar:
                    self.optarg = self._nextchar
                    self.optind += 1
                elif self.optind == argc:
                    self._error(f"option requires an argument -- {c}")
                    self.optopt = c
                    code = self._missing()
                else:
                    self.optarg = argv[self.optind]
                    self.optind += 1
            self._nextchar = None
        return (code, self.optarg)

    def next_option(self) -> Union[Result, None]:
        """Return the next ``(code, optarg)`` pair, or None when options are done."""
        self.optarg = None
        if not self.argv:
            return None

        if not self._nextchar:
            step = self._advance()
            if step is not True:
                return step

        current = self.argv[self.optind]
        if self.longopts is not None and (
            current[1] == "-"
            or (
                self.long_only
                and (len(current) > 2 or current[1] not in self._optstring)
            )
        ):
            result = self._long_option(current)
            if result is not None:
                return result

        return self._short_option()

    def __iter__(self) -> Iterator[Result]:
        while True:
            result = self.next_option()
            if result is None:
                return
            yield result

    def remaining(self) -> list[str]:
        """Return the arguments left after option processing."""
        return list(self.argv[self.optind:])


def _collect(parser: OptionParser) -> tuple[list[Result], list[str]]:
    options = list(parser)
    return options, parser.remaining()


def getopt(argv: Sequence[str], optstring: str) -> tuple[list[Result], list[str]]:
    """Parse short options; return the options found and the remaining arguments."""
    return _collect(OptionParser(argv, optstring))


def getopt_long(
    argv: Sequence[str], optstring: str, longopts: Sequence[LongOption]
) -> tuple[list[Result], list[str]]:
    """Parse short and ``--long`` options."""
    return _collect(OptionParser(argv, optstring, longopts))


def getopt_long_only(
    argv: Sequence[str], optstring: str, longopts: Sequence[LongOption]
) -> tuple[list[Result], list[str]]:
    """Parse options where a single ``-`` may also introduce a long option."""
    return _collect(OptionParser(argv, optstring, longopts, long_only=True))