"""Exceptions raised by jax_linktree.

Joint-level failures derive from :class:`JointError`; the concrete classes
also derive from ``ValueError`` so callers that only know about built-in
exceptions still catch them.
"""


class JointError(Exception):
    """Base class for failures while reading or writing joint values."""


class SizeMismatchError(JointError, ValueError):
    """The number of joint values does not match the number of joints."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} joint angles, got {actual}")
        self.expected = expected
        self.actual = actual


class OutOfLimitError(JointError, ValueError):
    """A joint value lies outside the joint's limits."""

    def __init__(self, joint_name: str, value: float, limits):
        super().__init__(
            f"Joint '{joint_name}': {value} is outside [{limits.min}, {limits.max}]"
        )
        self.joint_name = joint_name
        self.value = value
        self.limits = limits


class StructureError(ValueError):
    """The link graph is malformed (cycle, missing parent, ...)."""
