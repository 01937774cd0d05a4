from denormalizer.core.config import DenormalizerConfig, config, configure, override
from denormalizer.core.denormalize import denormalize, denormalize_response
from denormalizer.core.exceptions import (ConfigError, DenormalizerError,
                                          SchemaDefinitionError)
from denormalizer.core.schema import (CollectionSchema, EntitySchema,
                                      UnionSchema, array_of, classify,
                                      union_of, values_of)
from denormalizer.core.types import SchemaShape
