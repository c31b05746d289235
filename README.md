# relstructs

Data structures for relations with built-in closure properties
(equivalence and transitivity), meant for semi-naive evaluation of
Datalog-style rules, where facts move from a *new* relation to a *delta*
relation to a *total* relation, one round at a time.

## Contents

- `relstructs.union_find.EqRel`: an equivalence relation kept as disjoint
  sets. `add`, `contains`, `set_of`, `iter_all`, `combine`, `count_exact`.
- `relstructs.uf.UnionFind`: a union-find over hashable items with union by
  rank and path halving. Items get integer ids; `add`, `find`, `find_item`,
  `union`, `union_add`, `iter_class`, `iter_classes` and `check_invariants`.
- `relstructs.trrel_binary.TrRel`: a binary relation whose transitive closure
  is kept up to date on every `insert`. Pairs `(x, x)` are never stored.
- `relstructs.trrel_binary_ind`: `TrRelIndCommon`, the storage of a binary
  transitive relation in its new, delta or total role, the functions
  `init_indices` and `merge_delta_to_total_new_to_delta`, and the index views
  `TrRelInd0`, `TrRelInd1`, `TrRelIndNone`, `TrRelIndFull` and the writer
  `TrRelIndFullWrite`.
- `relstructs.trrel_ternary_ind`: `TrRel2IndCommon`, a ternary relation that
  is transitive in its last two columns (one binary transitive relation per
  first-column value, plus optional reverse maps for the second and third
  columns), its `merge_delta_to_total_new_to_delta`, the index views
  `TrRel2Ind0`, `TrRel2Ind0_1`, `TrRel2Ind0_2`, `TrRel2Ind1`, `TrRel2Ind2`,
  `TrRel2Ind1_2`, `TrRel2IndNone`, `TrRel2IndFull` and the writer
  `TrRel2IndFullWrite`.
- `relstructs.trrel`: `arrs_eq`, `inds_contain` and `reverse_maps_required`,
  which decide from a list of index column lists which reverse maps a ternary
  relation has to keep.
- Helpers: `relstructs.reiterable.ReiterableIterator` (an iterator that can be
  restarted with `clone`), `relstructs.rel_boilerplate.NoopRelIndexWrite` (an
  index writer that ignores every write) and `relstructs.utils` (moving the
  contents of dicts of sets or lists into one another).

## Installation

```
pip install .
```

## Examples

An equivalence relation:

```python
from relstructs.union_find import EqRel

eq = EqRel()
eq.add(1, 2)
eq.add(11, 12)
eq.add(3, 11)
eq.add(1, 3)
assert eq.contains(2, 12)
assert eq.count_exact() == 25
```

A union-find:

```python
from relstructs.uf import UnionFind

uf = UnionFind()
uf.union_add("a", "b")
assert uf.find_item("a") == uf.find_item("b")
```

A transitive relation:

```python
from relstructs.trrel_binary import TrRel

rel = TrRel()
rel.insert(1, 2)
rel.insert(2, 3)
assert rel.contains(1, 3)
assert rel.count_exact() == 3
```

One semi-naive round over a binary transitive relation:

```python
from relstructs.trrel_binary_ind import (
    TrRelIndCommon, TrRelIndFull, init_indices, merge_delta_to_total_new_to_delta,
)

new, delta, total = TrRelIndCommon.make_new(), TrRelIndCommon(), TrRelIndCommon()
init_indices(new, delta, total)
new.insert(1, 2)
new.insert(2, 3)
merge_delta_to_total_new_to_delta(new, delta, total)
assert TrRelIndFull(delta).contains_key((1, 3))
```

Choosing reverse maps for a ternary relation:

```python
from relstructs.trrel import reverse_maps_required

assert reverse_maps_required([[1], [0, 1]]) == (True, False)
```

## What the package does not do

It has no reflexive transitive relation: `TrRel` and the transitive indices
never relate an element to itself, and nothing in the package collapses
strongly connected elements into shared sets. It has no equivalence-relation
index views for semi-naive evaluation, and no rule engine or command line;
the structures are meant to be driven by code that runs the rules.

## Running the tests

```
pip install ".[test]"
pytest
```