"""Linear algebra kernel for building and transforming geometry.

A small Python project providing 4-component tuples, dense matrices with
cofactor-based determinants and inverses, affine transform builders and a
pixel canvas that exports to PPM, with every step written out explicitly.
"""

from __future__ import annotations

__version__ = "0.1.0"
