"""
Exceptions raised by unipoints.
"""

__all__ = [
    "UnipointsError",
    "OutOfRangeError",
    "UnassignedCodepointError",
    "InvariantViolationError",
]


class UnipointsError(Exception):
    pass


class OutOfRangeError(UnipointsError, IndexError):
    """
    The integer is not a code point at all: it lies outside [0, 0x10FFFF].
    """

    def __init__(self, codepoint: int):
        super().__init__(codepoint)
        self.codepoint = codepoint

    def __str__(self) -> str:
        return f"{self.codepoint!r} is outside the Unicode code space"


class UnassignedCodepointError(UnipointsError, KeyError):
    """
    The code point is valid, but no record exists for it in the requested view.

    Most of the code space is unassigned, so this is an ordinary outcome.
    """

    def __init__(self, codepoint: int):
        super().__init__(codepoint)
        self.codepoint = codepoint

    def __str__(self) -> str:
        return f"U+{self.codepoint:04X} is not assigned"


class InvariantViolationError(UnipointsError):
    """
    The dataset breaks one or more invariants and must not be served.

    Carries every violation that was found, not just the first one.
    """

    def __init__(self, violations):
        self.violations = list(violations)
        super().__init__(self.violations)

    def __str__(self) -> str:
        count = len(self.violations)
        lines = [f"{count} invariant violation{'' if count == 1 else 's'}:"]
        lines.extend(f"  - {violation}" for violation in self.violations)
        return "\n".join(lines)
