"""
Error taxonomy for the variant engine.

ValidationError aborts a whole request before anything is persisted.
ConflictError and PersistenceError are raised by the persistence
collaborator and handled per combination by the generation orchestrator.
"""


class VariantEngineError(Exception):
    """Base class for every error raised by the engine."""


class ValidationError(VariantEngineError):
    """Malformed input: bad axes, unknown strategy, negative price, etc."""


class VariantNotFoundError(ValidationError):
    def __init__(self, variant_ids):
        self.variant_ids = list(variant_ids)
        super().__init__(
            f"Variants not found: {', '.join(str(v) for v in self.variant_ids)}"
        )


class ConflictError(VariantEngineError):
    """A variant with the same (parent, axis signature) already exists."""

    def __init__(self, message='Variant already exists', signature=None):
        self.signature = signature
        super().__init__(message)


class PersistenceError(VariantEngineError):
    """Any other failure reported by the persistence collaborator."""

    def __init__(self, message, cause=None):
        self.cause = cause
        super().__init__(message)


class CombinatorialExplosionWarning(VariantEngineError, UserWarning):
    """
    Raised when a generation request would create more combinations than
    the configured ceiling and the caller did not confirm it.
    """

    def __init__(self, count, limit):
        self.count = count
        self.limit = limit
        super().__init__(
            f"Generation would create {count} combinations, above the limit "
            f"of {limit}. Confirm explicitly to proceed."
        )
