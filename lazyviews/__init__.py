"""
``lazyviews``
=============

Composable lazy sequence views. Adaptors wrap one or more cursors into
Python data, or into other views, and compute their elements on demand:
generation, random sampling, enumeration, mapping, exclusion, sort-merge
joins, and N-ary cartesian products.
"""
from ._version import __version__
from . import base, cursors, view, sources, transform, join, product
from .base import Category, CategoryError, Cursor
from .view import View, as_view
from .sources import generate, random, uniform
from .transform import enumerated, mapped, excluding
from .join import join_where
from .product import cartesian_product


__all__ = [
    "__version__",
    "base",
    "cursors",
    "view",
    "sources",
    "transform",
    "join",
    "product",
    "Category",
    "CategoryError",
    "Cursor",
    "View",
    "as_view",
    "generate",
    "random",
    "uniform",
    "enumerated",
    "mapped",
    "excluding",
    "join_where",
    "cartesian_product",
]
