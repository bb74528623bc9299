"""CSR sparse graphs with METIS/IJV file I/O, frequent itemsets, an integer hash table and option parsing."""

__version__ = "0.1.0"