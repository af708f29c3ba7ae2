# dockcore

Building blocks for protein–ligand docking, in pure Python with no
third-party dependencies.

## Modules

- `dockcore.matrix`: `Matrix` (column-major, can grow and take a block
  appended on its diagonal), `TriangularMatrix` and `StrictlyTriangularMatrix`,
  plus `triangular_matrix_index` and `triangular_matrix_index_permissive`.
  Elements are read and written with `m[i, j]`, or by flat index as `m[k]`.
- `dockcore.geometry`: vector helpers on 3-tuples (`vec_add`, `vec_sub`,
  `vec_scale`, `dot`, `norm`, `vec_distance_sqr`, `mat_vec_product`),
  `normalized_angle`, `int_pow`, and the box functions `closest_between`,
  `brick_closest` and `brick_distance_sqr`.
- `dockcore.randomness`: seeded helpers built on `random.Random`:
  `make_rng`, `random_fl`, `random_normal`, `random_int`, `random_sz`,
  `random_inside_sphere`, `random_in_box` and `auto_seed`. `auto_seed`
  derives a seed from the process id and the current time.
- `dockcore.quaternion`: an immutable `Quaternion` with product, right
  division, `norm` and `approx_eq`. The module also converts between rotation
  vectors (angle times axis), quaternions and 3×3 rotation matrices
  (`angle_to_quaternion`, `axis_angle_to_quaternion`, `quaternion_to_angle`,
  `quaternion_to_r3`), and provides `random_orientation`,
  `quaternion_increment` and `quaternion_difference`.
- `dockcore.conf`: conformations of ligands and flexible residues (`Conf`),
  their gradients or changes (`Change`, which can be indexed as one flat
  vector), `ConfSize`, `Scale` and `OutputType`. `OutputType` orders results
  by energy.
- `dockcore.visited`: `Visited`, a ring buffer of visited points (ten per
  variable once full). Its `interesting` method tells whether a local search
  from a new point is worth doing.
- `dockcore.bfgs`: the BFGS quasi-Newton minimizer `bfgs` with a
  backtracking `line_search`. `bfgs` does not modify its inputs and returns
  `(value, x, g)`. It can take an optional `Visited` memory.
- `dockcore.minimize`: `Ssd` (steepest descent with an adaptive step) and
  `QuasiNewton`, which both optimise an `OutputType` in place. They run
  against the abstract interfaces `ModelLike` and `GridLike`.
- `dockcore.precalculate`: `Precalculate` tabulates a `ScoringFunction` for
  every pair of atom types on a grid that is uniform in squared distance.
  It offers a piecewise-constant `eval_fast`, an interpolated `eval_deriv`
  returning (value, derivative / r), and `widen`, which flattens the energy
  wells.
- `dockcore.pdb`: `parse_pdb` reads `ATOM`/`HETATM` records into a `Pdb` of
  `PdbAtom`s. `Pdb.check(min_distance)` prints and returns the atom pairs
  that are closer than the given distance.
- `dockcore.errors`: `ParseError` and `FileError`, and `open_input` /
  `open_output`, which raise `FileError` when a file cannot be opened.
- `dockcore.tee`: `Tee` writes text to standard output and, if it is given
  a file name, to that log file too. It can be used as a context manager.
- `dockcore.split`: splits a multi-`MODEL` PDBQT file into one file per
  model.

## Installing

```
pip install .
```

## Splitting a multi-model PDBQT file

```
dockcore-split --input result.pdbqt
```

This writes `result_ligand_1.pdbqt`, `result_ligand_2.pdbqt`, ... for each
model. A model that holds flexible side chains (`BEGIN_RES` … `END_RES`)
also gets `result_flex_N.pdbqt`. The model numbers are zero-padded to the
width of the model count. `--ligand PREFIX` and `--flex PREFIX` choose
other prefixes, `--version` prints the version and `--help` lists the
options. A misplaced `MODEL`, `ENDMDL`, `BEGIN_RES` or `END_RES` tag is
reported with its line number, and the command exits with status 1.

## Using the library

```python
from dockcore.conf import Conf, ConfSize
from dockcore.randomness import make_rng

size = ConfSize(ligands=[3], flex=[])
c = Conf(size)
c.randomize((0, 0, 0), (10, 10, 10), make_rng(42))
print(c.values())   # position, rotation vector, then the 3 torsions
```

```python
from dockcore.pdb import parse_pdb

structure = parse_pdb("receptor.pdb")
for a, b, d in structure.check(1.0):   # atom pairs closer than 1 Å
    ...
```

## What this package does not do

dockcore is not a docking program. It has no docking command, no reader
that turns PDBQT ligands or receptors into molecular models, no concrete
scoring terms and no interaction grids. `ModelLike`, `GridLike` and
`ScoringFunction` are abstract interfaces. To use the optimizers and
`Precalculate` you have to implement them yourself. The only command is
`dockcore-split`.