"""
Errors raised while building schemas or configuring the denormalizer.

Denormalization itself never raises for data problems: missing records,
absent values and unknown union members are passed through. These errors
only cover caller mistakes that can be caught before any data is walked.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

Detail = Union[str, Dict[str, Any], List[Any]]


@dataclass(frozen=True)
class ErrorDetail:
    """One problem, with a stable code for callers that branch on it."""

    message: str
    code: str

    def __str__(self) -> str:
        return self.message


def as_error_details(detail: Any, code: str) -> Any:
    """Wrap every string in ``detail`` (recursively through dicts and lists) as an ErrorDetail."""
    if isinstance(detail, str):
        return ErrorDetail(detail, code)
    if isinstance(detail, dict):
        return {key: as_error_details(value, code) for key, value in detail.items()}
    if isinstance(detail, list):
        return [as_error_details(item, code) for item in detail]
    return detail


class DenormalizerError(Exception):
    """
    Base class for denormalizer errors.

    Attributes:
        detail: An ErrorDetail, or a dict/list of them keyed by the offending
            schema attribute or configuration key.
    """

    default_detail: Detail = "Denormalizer misuse."
    default_code: str = "denormalizer_error"

    def __init__(self, detail: Optional[Detail] = None):
        self.detail = as_error_details(
            self.default_detail if detail is None else detail, self.default_code
        )
        super().__init__(str(self.detail))

    @property
    def codes(self) -> Any:
        """The error codes, in the same shape as ``detail``."""

        def _codes(detail: Any) -> Any:
            if isinstance(detail, ErrorDetail):
                return detail.code
            if isinstance(detail, dict):
                return {key: _codes(value) for key, value in detail.items()}
            if isinstance(detail, list):
                return [_codes(item) for item in detail]
            return detail

        return _codes(self.detail)


class SchemaDefinitionError(DenormalizerError):
    """A schema node was built from arguments it cannot work with."""

    default_detail = "Invalid schema definition."
    default_code = "schema_definition_error"


class ConfigError(DenormalizerError):
    """An unknown configuration key, or a value that failed validation."""

    default_detail = "Invalid configuration."
    default_code = "config_error"
