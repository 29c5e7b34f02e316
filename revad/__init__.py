"""Reverse-mode automatic differentiation over scalar, vector and matrix expressions."""

__version__ = "0.1.0"