"""Variant annotation data services."""

from variantfilter.api.data_service import (
    InMemoryVariantDataService,
    VariantDataService,
    VariantDataServiceError,
)
from variantfilter.api.myvariant import MyVariantAPIError, MyVariantDataService

__all__ = [
    "VariantDataService",
    "VariantDataServiceError",
    "InMemoryVariantDataService",
    "MyVariantDataService",
    "MyVariantAPIError",
]
