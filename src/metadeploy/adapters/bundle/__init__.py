"""Metadata bundle files: schema, loading and translation."""

from __future__ import annotations

from .loader import load_bundle
from .schema import BundleEntry, MetadataBundle
from .translator import BundleError, translate_entry

__all__ = [
    "BundleEntry",
    "BundleError",
    "MetadataBundle",
    "load_bundle",
    "translate_entry",
]
