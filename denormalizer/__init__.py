"""
denormalizer: Rebuild nested documents from a normalized entity store.
"""

from denormalizer.core.config import DenormalizerConfig, config, configure, override
from denormalizer.core.containers import get_in, is_persistent, set_in
from denormalizer.core.denormalize import denormalize, denormalize_response
from denormalizer.core.exceptions import (ConfigError, DenormalizerError,
                                          ErrorDetail, SchemaDefinitionError)
from denormalizer.core.schema import (CollectionSchema, EntitySchema,
                                      UnionSchema, array_of, classify,
                                      union_of, values_of)
from denormalizer.core.types import Bag, SchemaShape, Store

__all__ = [
    # Entry points
    "denormalize",
    "denormalize_response",
    # Schema
    "EntitySchema",
    "CollectionSchema",
    "UnionSchema",
    "array_of",
    "values_of",
    "union_of",
    "classify",
    "SchemaShape",
    # Container access
    "get_in",
    "set_in",
    "is_persistent",
    # Types
    "Bag",
    "Store",
    # Configuration
    "DenormalizerConfig",
    "config",
    "configure",
    "override",
    # Errors
    "DenormalizerError",
    "SchemaDefinitionError",
    "ConfigError",
    "ErrorDetail",
]

__version__ = "0.1.0"
