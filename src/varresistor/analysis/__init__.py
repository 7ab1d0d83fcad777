"""
Simulation Engine
=================
Numerical core of the experiment.

1. Integration: cumulative resistance R(x) = integral of rho / A(s) ds.
2. Measurement: ideal voltage I * R(x) plus instrument and Johnson noise.

Note: This package should be pure Python/NumPy and should NOT import PySide6.
"""
