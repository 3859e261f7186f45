"""Exceptions shared by the core state machines."""


class InvariantError(RuntimeError):
    """Raised when an internal consistency rule is broken.

    These indicate a logic bug rather than a runtime condition, so callers
    are expected to let them propagate and abort the current operation.
    """
