"""Unified exception taxonomy for the DGGS query engine.

Provides a shared base exception hierarchy for grid providers, zone
identifier handling, and the query operations. Every domain exception
inherits from ``DGGSError`` and carries structured context fields that
enable consistent retry decisions and operator diagnostics.

Taxonomy categories
-------------------
- ``ValidationError``   — bad identifiers or query arguments, never retryable.
- ``transient`` / ``permanent`` — provider failures, classified by their
  ``retryable`` flag.
- ``ContractError``     — a provider broke the grid contract, never retryable.

The engine itself never retries: ``retryable`` is advice to the caller.
Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class DGGSError(Exception):
    """Base exception for all DGGS-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Operation where the error occurred
            (e.g. ``"zone_lookup"``, ``"envelope_query"``).
        code: Machine-readable error code (e.g. ``"INVALID_ZONE_ID"``).
        retryable: Whether the caller may retry the operation.
        correlation_id: Request correlation identifier.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category from the class, else from ``retryable``."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(DGGSError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(DGGSError):
    """A grid provider returned data violating the grid contract."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Query argument errors
# ---------------------------------------------------------------------------


class InvalidResolutionError(ValueError, ValidationError):
    """A query asked for a resolution the grid cannot serve."""

    default_stage = "query"
    default_code = "INVALID_RESOLUTION"

    def __init__(self, resolution: int, message: str = "") -> None:
        self.resolution = resolution
        ValidationError.__init__(self, message or f"Invalid target resolution: {resolution}")


class InvalidRadiusError(ValueError, ValidationError):
    """A neighbor query was given a negative radius."""

    default_stage = "neighbors"
    default_code = "INVALID_RADIUS"

    def __init__(self, radius: int) -> None:
        self.radius = radius
        ValidationError.__init__(self, f"Neighbor radius must be >= 0, got {radius}")
