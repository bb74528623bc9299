"""Sparse graphs in CSR form: reading, writing and structural transforms."""

from __future__ import annotations

import contextlib
import dataclasses
import enum
import os
import sys
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import IO, Any, Union

PathLike = Union[str, "os.PathLike[str]"]

_VERTEX_FIELDS = ("ivwgts", "fvwgts", "ivsizes", "fvsizes", "vlabels")
_EDGE_FIELDS = ("iadjwgt", "fadjwgt")


class GraphFormat(enum.IntEnum):
    """File formats understood by :func:`read_graph` and :func:`write_graph`."""

    METIS = 1
    IJV = 2
    HIJV = 3


class GraphFormatError(ValueError):
    """Raised when a graph file is malformed or a format is not supported."""


def _optional_list(values: Sequence[Any] | None) -> list[Any] | None:
    return None if values is None else list(values)


@dataclass
class Graph:
    """A graph in CSR form.

    The neighbours of vertex ``v`` are ``adjncy[xadj[v]:xadj[v + 1]]``.
    Edge weights (``iadjwgt`` or ``fadjwgt``) run parallel to ``adjncy``;
    vertex weights, sizes and labels hold one entry per vertex.
    """

    xadj: list[int] = dataclasses.field(default_factory=lambda: [0])
    adjncy: list[int] = dataclasses.field(default_factory=list)
    iadjwgt: list[int] | None = None
    fadjwgt: list[float] | None = None
    ivwgts: list[int] | None = None
    fvwgts: list[float] | None = None
    ivsizes: list[int] | None = None
    fvsizes: list[float] | None = None
    vlabels: list[int] | None = None

    def __post_init__(self) -> None:
        self.xadj = list(self.xadj)
        self.adjncy = list(self.adjncy)
        if not self.xadj:
            raise ValueError("xadj must hold at least one entry")
        for name in _EDGE_FIELDS + _VERTEX_FIELDS:
            setattr(self, name, _optional_list(getattr(self, name)))

    @property
    def nvtxs(self) -> int:
        """Number of vertices."""
        return len(self.xadj) - 1

    def nedges(self) -> int:
        """Number of stored (directed) adjacency entries."""
        return self.xadj[-1]

    def neighbors(self, v: int) -> list[int]:
        """Return the adjacency list of vertex ``v``."""
        if not 0 <= v < self.nvtxs:
            raise IndexError(f"vertex {v} outside [0, {self.nvtxs})")
        return self.adjncy[self.xadj[v]:self.xadj[v + 1]]

    def copy(self) -> Graph:
        """Return an independent copy of the graph."""
        return dataclasses.replace(
            self,
            **{f.name: _optional_list(getattr(self, f.name)) for f in dataclasses.fields(self)},
        )

    def transpose(self) -> Graph:
        """Return the graph with every edge reversed; vertex data is copied."""
        rows: list[list[tuple[int, int]]] = [[] for _ in range(self.nvtxs)]
        for vi in range(self.nvtxs):
            for ei in range(self.xadj[vi], self.xadj[vi + 1]):
                rows[self.adjncy[ei]].append((vi, ei))

        xadj = [0]
        adjncy: list[int] = []
        order: list[int] = []
        for row in rows:
            for vi, ei in row:
                adjncy.append(vi)
                order.append(ei)
            xadj.append(len(adjncy))

        edge_data = {
            name: None if getattr(self, name) is None else [getattr(self, name)[e] for e in order]
            for name in _EDGE_FIELDS
        }
        vertex_data = {name: _optional_list(getattr(self, name)) for name in _VERTEX_FIELDS}
        return Graph(xadj=xadj, adjncy=adjncy, **edge_data, **vertex_data)

    def extract_subgraph(self, vstart: int, nvtxs: int) -> Graph:
        """Return the rows of ``nvtxs`` consecutive vertices starting at ``vstart``.

        Adjacency entries keep their original vertex numbers.
        """
        if vstart < 0 or nvtxs < 0 or vstart + nvtxs > self.nvtxs:
            raise ValueError(
                f"vertices [{vstart}, {vstart + nvtxs}) are not within the "
                f"graph's {self.nvtxs} vertices"
            )
        lo = self.xadj[vstart]
        hi = self.xadj[vstart + nvtxs]
        xadj = [x - lo for x in self.xadj[vstart:vstart + nvtxs + 1]]
        edge_data = {
            name: None if getattr(self, name) is None else getattr(self, name)[lo:hi]
            for name in _EDGE_FIELDS
        }
        vertex_data = {
            name: None if getattr(self, name) is None else getattr(self, name)[vstart:vstart + nvtxs]
            for name in _VERTEX_FIELDS
        }
        return Graph(xadj=xadj, adjncy=self.adjncy[lo:hi], **edge_data, **vertex_data)

    def reorder(
        self,
        perm: Sequence[int] | None = None,
        iperm: Sequence[int] | None = None,
    ) -> Graph:
        """Return the graph renumbered so that old vertex ``u`` becomes ``perm[u]``.

        ``iperm`` is the inverse: new vertex ``v`` was old vertex ``iperm[v]``.
        Either may be omitted, but not both.
        """
        n = self.nvtxs
        if perm is None and iperm is None:
            raise ValueError("either perm or iperm must be given")
        if perm is None:
            assert iperm is not None
            if len(iperm) != n:
                raise ValueError("iperm must hold one entry per vertex")
            perm = [0] * n
            for i, u in enumerate(iperm):
                perm[u] = i
        if iperm is None:
            if len(perm) != n:
                raise ValueError("perm must hold one entry per vertex")
            iperm = [0] * n
            for i, u in enumerate(perm):
                iperm[u] = i
        if len(perm) != n or len(iperm) != n:
            raise ValueError("perm and iperm must hold one entry per vertex")

        xadj = [0]
        adjncy: list[int] = []
        edge_data: dict[str, list[Any] | None] = {
            name: None if getattr(self, name) is None else [] for name in _EDGE_FIELDS
        }
        for v in range(n):
            u = iperm[v]
            lo, hi = self.xadj[u], self.xadj[u + 1]
            adjncy.extend(perm[a] for a in self.adjncy[lo:hi])
            for name, target in edge_data.items():
                if target is not None:
                    target.extend(getattr(self, name)[lo:hi])
            xadj.append(len(adjncy))

        vertex_data = {
            name: None if getattr(self, name) is None else [getattr(self, name)[iperm[v]] for v in range(n)]
            for name in _VERTEX_FIELDS
        }
        return Graph(xadj=xadj, adjncy=adjncy, **edge_data, **vertex_data)


def _strtol(token: str) -> int:
    """Parse an integer with C base-0 rules: 0x for hex, a leading 0 for octal."""
    sign = 1
    body = token
    if body.startswith(("+", "-")):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body[:2].lower() == "0x":
        digits, base = body[2:], 16
    elif len(body) > 1 and body.startswith("0"):
        digits, base = body[1:], 8
    else:
        digits, base = body, 10
    if not digits or digits[0] in "+-" or "_" in digits or not digits.isalnum():
        raise ValueError(f"invalid integer {token!r}")
    return sign * int(digits, base)


class _Tokens:
    """Whitespace-separated tokens of one line, consumed from the left."""

    def __init__(self, text: str) -> None:
        self._items = text.split()
        self._pos = 0

    def take(self, parse: Callable[[str], Any]) -> Any:
        if self._pos >= len(self._items):
            return None
        try:
            value = parse(self._items[self._pos])
        except ValueError:
            return None
        self._pos += 1
        return value


def _read_metis(
    path: PathLike, float_edge_weights: bool, float_vertex_weights: bool, float_vertex_sizes: bool
) -> Graph:
    with open(path, "r") as fh:
        rows: Iterator[str] = (line for line in fh if not line.startswith("%"))

        header = next(rows, None)
        if header is None:
            raise GraphFormatError(f"Premature end of input file: file:{path}")
        numbers: list[int] = []
        for token in header.split()[:4]:
            try:
                numbers.append(int(token))
            except ValueError:
                break
        if len(numbers) < 2:
            raise GraphFormatError(
                "Header line must contain at least 2 integers (#vtxs and #edges)."
            )
        nvtxs = numbers[0]
        nedges = 2 * numbers[1]
        fmt = numbers[2] if len(numbers) > 2 else 0
        ncon = numbers[3] if len(numbers) > 3 else 0
        if nvtxs < 0 or nedges < 0:
            raise GraphFormatError("The numbers of vertices and edges must be non-negative.")
        if fmt < 0 or fmt > 111:
            raise GraphFormatError(f"Cannot read this type of file format [fmt={fmt}]!")
        code = f"{fmt:03d}"
        readsizes = code[0] == "1"
        readwgts = code[1] == "1"
        readvals = code[2] == "1"
        ncon = ncon if ncon > 0 else 1

        size_parse = float if float_vertex_sizes else _strtol
        wgt_parse = float if float_vertex_weights else _strtol
        val_parse = float if float_edge_weights else _strtol

        xadj = [0]
        adjncy: list[int] = []
        vsizes: list[Any] = []
        vwgts: list[Any] = []
        ewgts: list[Any] = []

        for i in range(nvtxs):
            line = next(rows, None)
            if line is None:
                raise GraphFormatError(
                    f"Premature end of input file: file while reading row {i}"
                )
            tokens = _Tokens(line)

            if readsizes:
                size = tokens.take(size_parse)
                if size is None:
                    raise GraphFormatError(
                        f"The line for vertex {i + 1} does not have size information"
                    )
                if size < 0:
                    raise GraphFormatError(f"The size for vertex {i + 1} must be >= 0")
                vsizes.append(size)

            if readwgts:
                for con in range(ncon):
                    weight = tokens.take(wgt_parse)
                    if weight is None:
                        raise GraphFormatError(
                            f"The line for vertex {i + 1} does not have enough weights "
                            f"for the {ncon} constraints."
                        )
                    if weight < 0:
                        raise GraphFormatError(
                            f"The weight vertex {i + 1} and constraint {con} must be >= 0"
                        )
                    vwgts.append(weight)

            while (column := tokens.take(_strtol)) is not None:
                if column - 1 < 0:
                    raise GraphFormatError(
                        f"Error: Invalid column number {column} at row {i}."
                    )
                if readvals:
                    value = tokens.take(val_parse)
                    if value is None:
                        raise GraphFormatError(
                            f"Value could not be found for edge! Vertex:{i}, NNZ:{len(adjncy)}"
                        )
                    ewgts.append(value)
                adjncy.append(column - 1)
            xadj.append(len(adjncy))

    if len(adjncy) != nedges:
        raise GraphFormatError(
            "Something wrong with the number of edges in the input file. "
            f"nedges={nedges}, Actualnedges={len(adjncy)}."
        )

    return Graph(
        xadj=xadj,
        adjncy=adjncy,
        iadjwgt=ewgts if readvals and not float_edge_weights else None,
        fadjwgt=ewgts if readvals and float_edge_weights else None,
        ivwgts=vwgts if readwgts and not float_vertex_weights else None,
        fvwgts=vwgts if readwgts and float_vertex_weights else None,
        ivsizes=vsizes if readsizes and not float_vertex_sizes else None,
        fvsizes=vsizes if readsizes and float_vertex_sizes else None,
    )


def _read_ijv(
    path: PathLike, with_header: bool, has_values: bool, one_based: bool, float_edge_weights: bool
) -> Graph:
    with open(path, "r") as fh:
        lines = [line for line in fh if line.strip()]
    tokens = [token for line in lines for token in line.split()]
    nlines = len(lines)

    if with_header:
        if nlines < 1 or len(tokens) < 2:
            raise GraphFormatError("Error: Failed to read the header line.")
        try:
            int(tokens[0])
            int(tokens[1])
        except ValueError:
            raise GraphFormatError("Error: Failed to read the header line.") from None
        tokens = tokens[2:]
        nlines -= 1

    per = 3 if has_values else 2
    if len(tokens) != per * nlines:
        raise GraphFormatError(
            f"Error: The number of numbers ({len(tokens)}) in the input file "
            f"is not a multiple of {per}."
        )

    offset = 1 if one_based else 0
    value_parse = float if float_edge_weights else int
    entries: list[tuple[int, int, Any]] = []
    for n in range(nlines):
        chunk = tokens[per * n:per * n + per]
        try:
            i = int(chunk[0]) - offset
            j = int(chunk[1]) - offset
            value = value_parse(chunk[2]) if has_values else None
        except ValueError:
            what = "(i, j, val)" if has_values else "(i, j) value"
            raise GraphFormatError(f"Error: Failed to read {what} for nedge: {n}.") from None
        if i < 0 or j < 0:
            raise GraphFormatError(f"Error: Invalid vertex number in entry {n}.")
        entries.append((i, j, value))

    nvtxs = max([0] + [max(i, j) for i, j, _ in entries]) + 1
    rows: list[list[tuple[int, Any]]] = [[] for _ in range(nvtxs)]
    for i, j, value in entries:
        rows[i].append((j, value))

    xadj = [0]
    adjncy: list[int] = []
    values: list[Any] = []
    for row in rows:
        for j, value in row:
            adjncy.append(j)
            values.append(value)
        xadj.append(len(adjncy))

    return Graph(
        xadj=xadj,
        adjncy=adjncy,
        iadjwgt=values if has_values and not float_edge_weights else None,
        fadjwgt=values if has_values and float_edge_weights else None,
    )


def read_graph(
    path: PathLike,
    fmt: GraphFormat = GraphFormat.METIS,
    has_values: bool = False,
    one_based: bool = True,
    float_edge_weights: bool = False,
    float_vertex_weights: bool = False,
    float_vertex_sizes: bool = False,
) -> Graph:
    """Read a graph from ``path``.

    METIS files describe their own weights in the header and are always
    numbered from one, so ``has_values`` and ``one_based`` apply only to the
    IJV formats. The ``float_*`` flags choose float rather than integer storage.
    """
    try:
        fmt = GraphFormat(fmt)
    except ValueError:
        raise GraphFormatError(f"Unrecognized format: {fmt}") from None
    if fmt is GraphFormat.METIS:
        return _read_metis(path, float_edge_weights, float_vertex_weights, float_vertex_sizes)
    return _read_ijv(path, fmt is GraphFormat.HIJV, has_values, one_based, float_edge_weights)


def _write_metis(graph: Graph, out: IO[str]) -> None:
    has_ewgts = graph.iadjwgt is not None or graph.fadjwgt is not None
    has_vwgts = graph.ivwgts is not None or graph.fvwgts is not None
    has_vsizes = graph.ivsizes is not None or graph.fvsizes is not None

    header = f"{graph.nvtxs} {graph.xadj[graph.nvtxs] // 2}"
    if has_vwgts or has_vsizes or has_ewgts:
        header += f" {int(has_vsizes)}{int(has_vwgts)}{int(has_ewgts)}"
    out.write(header + "\n")

    for i in range(graph.nvtxs):
        parts: list[str] = []
        if graph.ivsizes is not None:
            parts.append(f" {graph.ivsizes[i]}")
        elif graph.fvsizes is not None:
            parts.append(f" {graph.fvsizes[i]:f}")
        if graph.ivwgts is not None:
            parts.append(f" {graph.ivwgts[i]}")
        elif graph.fvwgts is not None:
            parts.append(f" {graph.fvwgts[i]:f}")
        for j in range(graph.xadj[i], graph.xadj[i + 1]):
            parts.append(f" {graph.adjncy[j] + 1}")
            if graph.iadjwgt is not None:
                parts.append(f" {graph.iadjwgt[j]}")
            elif graph.fadjwgt is not None:
                parts.append(f" {graph.fadjwgt[j]:f}")
        out.write("".join(parts) + "\n")


def _write_ijv(graph: Graph, out: IO[str], numbering: int) -> None:
    for i in range(graph.nvtxs):
        for j in range(graph.xadj[i], graph.xadj[i + 1]):
            out.write(f"{i + numbering} {graph.adjncy[j] + numbering} ")
            if graph.iadjwgt is not None:
                out.write(f" {graph.iadjwgt[j]}\n")
            elif graph.fadjwgt is not None:
                out.write(f" {graph.fadjwgt[j]:f}\n")
            else:
                out.write(" 1\n")


def write_graph(
    graph: Graph,
    path: PathLike | None = None,
    fmt: GraphFormat = GraphFormat.METIS,
    numbering: int = 0,
) -> None:
    """Write ``graph`` to ``path``, or to standard output when ``path`` is None.

    ``numbering`` is the number of the first vertex in IJV output; METIS
    output is always numbered from one.
    """
    try:
        fmt = GraphFormat(fmt)
    except ValueError:
        raise GraphFormatError(f"Unknown file format. {fmt}") from None
    if fmt is GraphFormat.HIJV:
        raise GraphFormatError(f"Unknown file format. {int(fmt)}")

    with contextlib.ExitStack() as stack:
        out: IO[str] = sys.stdout if path is None else stack.enter_context(open(path, "w"))
        if fmt is GraphFormat.METIS:
            _write_metis(graph, out)
        else:
            _write_ijv(graph, out, numbering)