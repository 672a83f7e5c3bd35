"""Reference data providers."""

from .provider import ReferenceDataProvider, JsonReferenceProvider
from .cache import CachingProvider

__all__ = ["ReferenceDataProvider", "JsonReferenceProvider", "CachingProvider"]
