"""Data structures for equivalence and transitive relations, with semi-naive index views."""

__version__ = "0.1.0"

__all__ = [
    "reiterable",
    "rel_boilerplate",
    "trrel",
    "trrel_binary",
    "trrel_binary_ind",
    "trrel_ternary_ind",
    "uf",
    "union_find",
    "utils",
]