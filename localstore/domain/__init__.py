"""Caller-side value types (binding descriptors) with no storage dependency."""

from .bindings import StoreBinding

__all__ = ["StoreBinding"]
