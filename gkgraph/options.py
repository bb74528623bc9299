"""Long-option descriptions and the matching of (possibly abbreviated) long options."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union


class ArgKind(enum.IntEnum):
    """Whether a long option takes an argument."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long option.

    When ``flag`` is set, a parser stores ``val`` under that name and reports 0;
    otherwise it reports ``val``.
    """

    name: str
    has_arg: ArgKind = ArgKind.NONE
    val: Union[int, str] = 0
    flag: Union[str, None] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("a long option needs a name")
        object.__setattr__(self, "has_arg", ArgKind(self.has_arg))


@dataclass(frozen=True)
class LongMatch:
    """The long option a piece of command-line text resolved to.

    ``argument`` is the text after ``=`` (possibly empty), or None when the
    text held no ``=``.
    """

    index: int
    option: LongOption
    argument: Union[str, None]
    exact: bool


def match_long_option(
    longopts: Sequence[LongOption], text: str, long_only: bool = False
) -> Union[LongMatch, None]:
    """Resolve ``text`` (the option without its leading dashes) to a long option.

    An exact name wins; otherwise a unique prefix match is accepted. Several
    prefix matches are ambiguous unless they all describe the same option,
    and always ambiguous when ``long_only`` is set. Returns None when nothing
    matches and raises ValueError when the text is ambiguous.
    """
    name, sep, value = text.partition("=")
    argument = value if sep else None

    found: Union[tuple[int, LongOption], None] = None
    ambiguous = False
    for index, option in enumerate(longopts):
        if not option.name.startswith(name):
            continue
        if len(option.name) == len(name):
            return LongMatch(index, option, argument, exact=True)
        if found is None:
            found = (index, option)
        elif long_only or (
            (found[1].has_arg, found[1].flag, found[1].val)
            != (option.has_arg, option.flag, option.val)
        ):
            ambiguous = True

    if ambiguous:
        raise ValueError(f"option '{name}' is ambiguous")
    if found is None:
        return None
    return LongMatch(found[0], found[1], argument, exact=False)