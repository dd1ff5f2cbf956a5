class MRZError(Exception):
    """Base class for structural MRZ errors."""


class InvalidLineLength(MRZError):
    """Raised when the number or width of MRZ lines matches no known format."""


class UnresolvedFormat(InvalidLineLength):
    """Raised when two equal-width lines match neither TD2 nor TD3."""


class InvalidCharacter(MRZError, ValueError):
    """Raised when a checksum input contains a character outside the MRZ alphabet."""


class IndexOutOfRange(MRZError, IndexError):
    """Raised when a field slice runs past the end of its line."""


class InvalidDateFormat(MRZError, ValueError):
    """Raised when a date field is not exactly six digits long."""


class InvalidDateCharacter(MRZError, ValueError):
    """Raised when a date field contains something other than digits or fillers."""
