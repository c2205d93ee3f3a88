from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class PoolNotFoundError(DomainError):
    """Requested whirlpool does not exist."""


class LiquidityCurveInputError(DomainError):
    """Invalid parameters for the liquidity curve."""


class MalformedRecordError(DomainError):
    """A tick array record cannot be reshaped into a TickArray."""


class InvariantViolationError(DomainError):
    """Tick arrays overlap or do not belong to a single pool."""


class DuplicateRangeError(InvariantViolationError):
    """Two tick arrays share the same start tick index."""
