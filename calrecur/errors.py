class InvalidPatternError(ValueError):
    """Raised when a recurrence pattern violates its structural invariants.

    Always raised before any occurrence is generated, so callers never see a
    partially computed result.
    """
