"""BLAS-style kernels, CGLS, sparse matrices and Harwell-Boeing file I/O for least-squares work."""

__version__ = "0.1.0"