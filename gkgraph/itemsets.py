"""Frequent itemset discovery by depth-first projection of a transaction matrix."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Itemset:
    """A discovered itemset and the transactions that contain it.

    ``items`` lists the item ids in the order they were added to the pattern;
    ``transactions`` lists the supporting transaction ids in increasing order.
    """

    items: tuple[int, ...]
    transactions: tuple[int, ...]

    @property
    def support(self) -> int:
        """Number of transactions that contain the itemset."""
        return len(self.transactions)


@dataclass(frozen=True)
class _Column:
    item: int
    rows: tuple[int, ...]


@dataclass(frozen=True)
class _Limits:
    minfreq: int
    maxfreq: int
    minlen: int
    maxlen: int


def _project(columns: Sequence[_Column], cid: int | None, limits: _Limits) -> list[_Column]:
    """Project the column set on column ``cid`` (all rows when ``cid`` is None).

    Only columns after ``cid`` whose projected length lies within the frequency
    limits are kept, ordered by increasing length.
    """
    if cid is None:
        marked = None
        later = columns
        offset = 0
    else:
        marked = set(columns[cid].rows)
        later = columns[cid + 1:]
        offset = cid + 1

    candidates = []
    for position, column in enumerate(later, start=offset):
        rows = column.rows if marked is None else tuple(r for r in column.rows if r in marked)
        if limits.minfreq <= len(rows) <= limits.maxfreq:
            candidates.append((len(rows), position, _Column(column.item, rows)))

    candidates.sort(key=lambda cand: (cand[0], cand[1]))
    return [column for _, _, column in candidates]


def _search(columns: list[_Column], prefix: tuple[int, ...], limits: _Limits) -> Iterator[Itemset]:
    for index, column in enumerate(columns):
        pattern = prefix + (column.item,)
        if len(pattern) >= limits.minlen:
            yield Itemset(pattern, column.rows)
        if len(pattern) < limits.maxlen:
            yield from _search(_project(columns, index, limits), pattern, limits)


def find_frequent_itemsets(
    tranptr: Sequence[int],
    tranind: Sequence[int],
    minfreq: int,
    maxfreq: int = -1,
    minlen: int = 1,
    maxlen: int = -1,
) -> Iterator[Itemset]:
    """Yield the frequent itemsets of a transaction database in CSR form.

    Transaction ``t`` holds the items ``tranind[tranptr[t]:tranptr[t + 1]]``.
    A ``maxfreq`` of -1 means the number of transactions; a ``maxlen`` of -1
    means the number of distinct item ids.
    """
    if len(tranptr) < 1:
        raise ValueError("tranptr must hold at least one entry")
    if any(b < a for a, b in zip(tranptr, tranptr[1:])):
        raise ValueError("tranptr must be non-decreasing")
    if tranptr[0] < 0 or tranptr[-1] > len(tranind):
        raise ValueError("tranptr points outside tranind")

    ntrans = len(tranptr) - 1
    used = tranind[: tranptr[-1]]
    if any(item < 0 for item in used):
        raise ValueError("item ids must be non-negative")
    if not used:
        return iter(())

    ncols = max(used) + 1
    rows_of: list[list[int]] = [[] for _ in range(ncols)]
    for t in range(ntrans):
        for item in tranind[tranptr[t]:tranptr[t + 1]]:
            rows_of[item].append(t)
    columns = [_Column(item, tuple(rows)) for item, rows in enumerate(rows_of)]

    limits = _Limits(
        minfreq=minfreq,
        maxfreq=ntrans if maxfreq == -1 else maxfreq,
        minlen=minlen,
        maxlen=ncols if maxlen == -1 else maxlen,
    )
    return _search(_project(columns, None, limits), (), limits)