"""Core services: catalog store, media store, song upload."""
from moody.core.catalog_store import JsonCatalogStore, MongoCatalogStore
from moody.core.media_store import ImageKitMediaStore, LocalMediaStore

__all__ = ["JsonCatalogStore", "MongoCatalogStore", "ImageKitMediaStore", "LocalMediaStore"]
