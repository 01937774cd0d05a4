from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from denormalizer.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


class DenormalizerConfig(BaseModel):
    """
    Global configuration for the denormalizer.

    Attributes:
        metadata_prefix: Schema attribute names starting with this prefix are
            schema metadata and are never treated as data attributes.
        default_id_attribute: Attribute used to read an entity's id when its
            schema does not name one.
        union_reference_attribute: Key marking a normalized union stub
            (``{"id": 1, "schema": "post"}``).
        log_unresolved: Log references that have no record in the store.
    """

    model_config = ConfigDict(validate_assignment=True)

    metadata_prefix: str = Field(default="_", min_length=1)
    default_id_attribute: str = Field(default="id", min_length=1)
    union_reference_attribute: str = Field(default="schema", min_length=1)
    log_unresolved: bool = True

    def configure(self, **kwargs: Any) -> None:
        """
        Update several settings at once. Nothing is applied unless every key
        is known and every value validates.
        """
        unknown = sorted(set(kwargs) - set(type(self).model_fields))
        if unknown:
            raise ConfigError(f"Invalid configuration key: {', '.join(unknown)}")
        try:
            validated = type(self).model_validate({**self.model_dump(), **kwargs})
        except PydanticValidationError as e:
            raise ConfigError(
                {".".join(map(str, error["loc"])): error["msg"] for error in e.errors()}
            ) from e
        for key in kwargs:
            setattr(self, key, getattr(validated, key))
        logger.debug(f"Denormalizer configuration updated: {kwargs}")

    def snapshot(self) -> Dict[str, Any]:
        return self.model_dump()


config = DenormalizerConfig()


def configure(**kwargs: Any) -> None:
    """Update the global configuration in place."""
    config.configure(**kwargs)


@contextmanager
def override(**kwargs: Any) -> Iterator[DenormalizerConfig]:
    """
    Temporarily apply configuration values, restoring the previous values on exit.

    Example:
        with override(metadata_prefix="$"):
            denormalize(article, entities, article_schema)
    """
    previous = config.snapshot()
    try:
        config.configure(**kwargs)
        yield config
    finally:
        config.configure(**previous)
