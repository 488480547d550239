"""Typed configuration model for the grid provider layer.

- ``ProviderConfig``: Configuration for a specific grid provider backend
- ``ModelValidationError``: Raised when a model is built with invalid fields

Design notes:
- Models are frozen dataclasses for immutability.
- Backend-specific knobs travel as strings in ``extra_params`` so the
  factory never needs to know which backend it is building.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dggs_query.core.exceptions import DGGSError

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ModelValidationError(ValueError, DGGSError):
    """Raised when a domain model is constructed with invalid field values.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_stage = "model_validation"
    default_code = "MODEL_VALIDATION_FAILED"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        DGGSError.__init__(self, formatted)


# ---------------------------------------------------------------------------
# Provider configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Configuration for a specific grid provider.

    Attributes:
        name: Provider identifier (must match the adapter registry key).
        max_resolution: Deepest resolution the provider will serve.
        extra_params: Provider-specific configuration parameters.
    """

    name: str
    max_resolution: int = 13
    extra_params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        check_non_empty("ProviderConfig", "name", self.name)
        check_min("ProviderConfig", "max_resolution", self.max_resolution, 0)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def check_min(model: str, field_name: str, value: float | int, lo: float | int) -> None:
    """Raise `ModelValidationError` if *value* is below *lo*."""
    if value < lo:
        raise ModelValidationError(model, field_name, value, f"must be >= {lo}")


def check_non_empty(model: str, field_name: str, value: str) -> None:
    """Raise `ModelValidationError` if *value* is empty or blank."""
    if not value or not value.strip():
        raise ModelValidationError(model, field_name, value, "must not be empty")
