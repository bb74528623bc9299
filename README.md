# gkgraph

A small library for sparse graphs stored in compressed sparse row (CSR) form,
with a few general-purpose helpers alongside: frequent itemset discovery,
an integer hash table and GNU-style command-line option parsing.

## Graphs (`gkgraph.graph`)

A `Graph` holds `xadj` and `adjncy`. The neighbours of vertex `v` are
`adjncy[xadj[v]:xadj[v + 1]]`, and `graph.neighbors(v)` returns them.
A graph may also carry these optional lists:

- integer or float edge weights: `iadjwgt`, `fadjwgt`
- vertex weights: `ivwgts`, `fvwgts`
- vertex sizes: `ivsizes`, `fvsizes`
- vertex labels: `vlabels`

Other members:

- `nvtxs`: the number of vertices.
- `nedges()`: the number of stored adjacency entries.
- `copy()`: an independent copy.
- `transpose()`: every edge reversed.
- `extract_subgraph(vstart, nvtxs)`: the rows of a run of consecutive vertices. It raises `ValueError` if the run does not fit in the graph.
- `reorder(perm=None, iperm=None)`: the graph renumbered so that old vertex `u` becomes `perm[u]`. At least one of `perm` and `iperm` must be given.

### Reading and writing

`read_graph(path, fmt=GraphFormat.METIS, ...)` reads three formats:

- METIS files. The header selects vertex sizes, vertex weights and edge weights. Vertices are numbered from one.
- `GraphFormat.IJV` files, with one `i j [value]` triple per line.
- `GraphFormat.HIJV` files, which are IJV files with a leading header line.

For the IJV formats, `has_values` and `one_based` describe the file. The flags `float_edge_weights`, `float_vertex_weights` and `float_vertex_sizes` store those values as floats instead of integers. A malformed file raises `GraphFormatError`.

`write_graph(graph, path=None, fmt=GraphFormat.METIS, numbering=0)` writes METIS or IJV text. It writes to standard output when `path` is None.

```python
from gkgraph.graph import Graph, GraphFormat, read_graph, write_graph

g = Graph(xadj=[0, 1, 3, 4], adjncy=[1, 0, 2, 1])
write_graph(g, "path.graph", GraphFormat.METIS)

g2 = read_graph("path.graph")
assert g2.neighbors(1) == [0, 2]

reversed_order = g2.reorder(perm=[2, 1, 0])
write_graph(reversed_order, None, GraphFormat.IJV, numbering=1)
```

## Frequent itemsets (`gkgraph.itemsets`)

`find_frequent_itemsets(tranptr, tranind, minfreq, maxfreq=-1, minlen=1, maxlen=-1)`
takes transactions in CSR form and yields `Itemset` records. Each record has:

- `items`: the item ids in the pattern.
- `transactions`: the supporting transaction ids.
- `support`: their count.

A `maxfreq` of -1 means the number of transactions. A `maxlen` of -1 means the number of item ids.

```python
from gkgraph.itemsets import find_frequent_itemsets

tranptr = [0, 2, 4, 5]
tranind = [0, 1, 0, 1, 1]
for itemset in find_frequent_itemsets(tranptr, tranind, minfreq=2):
    print(itemset.items, itemset.support)
```

## Hash table (`gkgraph.htable`)

`HashTable(nelements)` is an open-addressing table with linear probing. It maps integer keys to integer values and allows duplicate keys. It doubles its slot count once more than half of its slots are in use.

| Method | What it does |
| --- | --- |
| `insert` | Adds a key and value. |
| `search` | Returns a value for the key, or None. |
| `find_all` | Yields every value stored under the key. |
| `delete` | Removes one entry for the key. |
| `search_and_delete` | Removes one entry and returns its value. Raises `KeyError` if the key is absent. |
| `resize` | Rebuilds the table with a new slot count. |
| `reset` | Removes every entry. |
| `len()` | Gives the number of entries. |

`hash_slot(nelements, key)` gives the home slot of a key.

## Option parsing (`gkgraph.optparser`, `gkgraph.options`)

`getopt(argv, optstring)`, `getopt_long(argv, optstring, longopts)` and `getopt_long_only(argv, optstring, longopts)` each return two things:

- a list of `(code, optarg)` pairs
- the arguments left over

`argv[0]` is taken as the program name.

Supported features:

- `x:` marks a required argument and `x::` an optional one.
- A leading `+` or `-` in the option string selects the argument ordering.
- A leading `:` selects quiet error reporting.
- `--` ends option processing.
- `W;` lets `-W name` stand for a long option.
- Long options can be abbreviated.

Long options are described with `LongOption(name, has_arg=ArgKind.NONE, val=0, flag=None)`. `match_long_option` resolves abbreviated names.

For step-by-step control, use `OptionParser`. It has `next_option()` and iteration, `remaining()`, and the attributes `optind`, `optarg`, `optopt`, `longind` and `flags`.

```python
from gkgraph.optparser import getopt

options, rest = getopt(["prog", "-a", "-b", "x", "file"], "ab:")
# options == [("a", None), ("b", "x")], rest == ["file"]
```

## Utilities (`gkgraph.util`)

- `log2` and `is_pow2`: integer logarithm and power-of-two test.
- `flog2`: floating base-2 logarithm.
- `array_to_csr`: turns per-element set membership into CSR lists.
- `random_permute` and `identity_permutation`: random permutations.

## What this package does not do

The package has no graph algorithms beyond the structural transforms on `Graph`. In particular it does not provide:

- connected components
- breadth-first or best-first vertex orderings
- shortest paths
- sorting of adjacency lists
- symmetrisation

It has no readers or writers for typed binary arrays, and it installs no command-line program.

## Tests

```
pip install -e .[test]
pytest
```