"""Catalog package for loading Bandcamp collections into a queue."""

from bcradio.catalog.client import CatalogClient
from bcradio.catalog.loader import CollectionLoader, LoadRequest
from bcradio.catalog.models import (
    CatalogError,
    CatalogFetchError,
    CatalogPage,
    CollectionStats,
    ItemInfo,
    MalformedPayloadError,
    RawTrack,
)
from bcradio.catalog.normalizer import CatalogNormalizer

__all__ = [
    "CatalogClient",
    "CatalogError",
    "CatalogFetchError",
    "CatalogNormalizer",
    "CatalogPage",
    "CollectionLoader",
    "CollectionStats",
    "ItemInfo",
    "LoadRequest",
    "MalformedPayloadError",
    "RawTrack",
]
