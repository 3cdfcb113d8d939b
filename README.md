# boundls

`boundls` is a set of pure-Python building blocks for bound-constrained
least-squares work. It has no runtime dependencies.

## Modules

- `boundls.blas`: BLAS-style kernels on Python sequences. These are
  `daxpy`, `dcopy`, `ddot`, `dnrm2`, `dscal` and `dgemv`, with the
  `Order` and `Transpose` enums for `dgemv`. Routines that produce a
  vector update the given list in place and also return it.
- `boundls.sparse`: `CscMatrix`, a sparse matrix in compressed-column or
  triplet form.
  - `CscMatrix.allocate` creates an empty matrix.
  - `CscMatrix.from_dense` builds a matrix from a list of rows and drops
    zeros.
  - `resize` changes the matrix's capacity.
  - `is_csc` and `is_triplet` report which form the matrix is in.
  - The module also has the index-marking helpers `flip` and `unflip`.
- `boundls.cgls`: conjugate gradients for the damped normal equations
  `(N'N + damp I) x = N'r + c`.
  - `cgls` solves these equations.
  - `newton_step_cgls` computes a step restricted to a list of free
    variables.
  - Both return a `CglsResult`, which holds `x`, `residual`, `status`,
    `iterations` and `optimality`.
  - `status` is a `CglsStatus`: `CONVERGED`, `ITERATION_LIMIT` or
    `SINGULAR`.
- `boundls.debughash`: 64-bit checksums for comparing solver states while
  debugging. `hash_double` gives the IEEE-754 bit pattern, with both zeros
  giving 0. `hash_int_vector` and `hash_double_vector` give wrapping sums.
- `boundls.fortran_format`: parses Fortran edit descriptors such as
  `(8I10)`, `(4E20.13)` and `(1P,5D16.8)`.
  - `parse_int_format` returns an `IntFormat`.
  - `parse_real_format` returns a `RealFormat`.
  - Both classes have `printf_spec()` and `format(value)`.
  - Unsupported descriptors raise `FormatError`.
- `boundls.hbread`: reads Harwell-Boeing files with numeric values.
  - `read_header` reads from a stream and `read_info` reads from a path.
    Both return an `HBHeader`.
  - `read_matrix` returns an `HBMatrix` with zero-based `colptr` and
    `rowind`, plus `values`.
  - `read_aux` reads right-hand sides (`"F"`), guesses (`"G"`) or exact
    solutions (`"X"`).
  - Malformed files raise `HBError`.
- `boundls.hbwrite`: `write_matrix` writes a compressed-column matrix and
  optional auxiliary vectors. It writes to a path, to a text stream, or to
  standard output when the target is `None`. Indices are given zero-based
  and written one-based. `D` exponents are written as `E`.
- `boundls.hbtext`: `read_matrix_text`, `read_aux_text` and
  `write_matrix_text` do the same work but keep values as the strings
  found in the file, so values can be copied between files exactly.
- `boundls.problem_files`: `write_problem(basename, a, b, bl, bu, c, x,
  title, key)` writes two files.
  - `<basename>.hbf` holds A and b.
  - `<basename>.opt` holds `bl`, `bu`, `c` and `x`, one value per line
    in that order.
  - Infinite values are written as ±1e20, and a NaN raises `ValueError`.
  - The function returns the paths of both files.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

### Vector kernels

```python
from boundls.blas import daxpy, dnrm2

y = [1.0, 1.0, 1.0]
daxpy(2.0, [1.0, 2.0, 3.0], y)   # y is now [3.0, 5.0, 7.0]
print(dnrm2([3.0, 4.0]))         # 5.0
```

### CGLS

`cgls` takes the matrix as two callables. One computes `A @ p` and the
other computes `A.T @ r`.

```python
from boundls.cgls import cgls

A = [[1.0, 0.0], [0.0, 2.0], [1.0, 1.0]]

def matvec(p):
    return [sum(a * v for a, v in zip(row, p)) for row in A]

def rmatvec(r):
    return [sum(row[j] * r[i] for i, row in enumerate(A)) for j in range(2)]

result = cgls(matvec, rmatvec, 3, 2, [1.0, 2.0, 3.0], 50, 1e-10)
print(result.status, result.x)
```

### Harwell-Boeing files

```python
from boundls.hbread import read_aux, read_info, read_matrix
from boundls.problem_files import write_problem
from boundls.sparse import CscMatrix

a = CscMatrix.from_dense([[1.0, 0.0], [0.0, 2.0], [1.0, 1.0]])
inf = float("inf")
hbf, opt = write_problem(
    "myproblem", a,
    b=[1.0, 2.0, 3.0],
    bl=[0.0, -inf], bu=[inf, inf],
    c=[0.0, 0.0], x=[0.0, 0.0],
    title="A test problem", key="KEY",
)

header = read_info(hbf)            # header.nrow == 3, header.ncol == 2
matrix = read_matrix(hbf)          # zero-based colptr and rowind
rhs = read_aux(hbf, "F")           # [1.0, 2.0, 3.0]
```

## What the package does not do

`boundls` supplies the pieces around a bound-constrained least-squares
solver, but not the solver itself. There is no routine that minimises
`||Ax - b||` subject to `bl <= x <= bu`, and no command-line program that
reads a problem file and solves it. The package also has no
preconditioner and no sparse factorisations such as LU, Cholesky or QR.