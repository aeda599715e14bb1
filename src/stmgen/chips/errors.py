"""
Exception hierarchy for chip identifier parsing and target resolution.

Input errors (bad chip identifiers) and data-consistency errors (a series
without a table row) are both ResolutionError subclasses, but only the
former are caused by the user. Callers use ``is_user_error`` to tell them
apart when reporting.
"""


class StmgenError(Exception):
    """Base class for all stmgen errors."""

    is_user_error = True


class ResolutionError(StmgenError):
    """Exception raised when a chip identifier cannot be resolved."""

    pass


class ParseError(ResolutionError):
    """Exception raised when a chip identifier cannot be parsed."""

    pass


class EmptyIdentifierError(ParseError):
    """Raised for an empty or whitespace-only chip identifier."""

    def __init__(self, raw: str = ""):
        self.raw = raw
        super().__init__("Chip identifier is empty")


class UnrecognizedPrefixError(ParseError):
    """Raised when no known series prefix matches the chip identifier."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Unrecognized chip identifier: {raw!r}")


class NoTableEntryError(ResolutionError):
    """
    Raised when a parsed series has no row in the series table.

    This is a maintenance bug in the series table, not a user mistake: the
    parser accepted the identifier but the table cannot resolve it.
    """

    is_user_error = False

    def __init__(self, series):
        self.series = series
        super().__init__(
            f"Internal error: series {series.value} has no entry in the series table"
        )


class InvalidSuffixError(ParseError):
    """Raised when the part number after the series prefix has invalid characters."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(
            f"Invalid chip identifier: {raw!r} (part number may only contain A-Z and 0-9)"
        )
