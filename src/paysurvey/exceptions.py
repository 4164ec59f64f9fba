"""Exception types raised by the survey pipeline."""


class PaysurveyError(ValueError):
    """Base class for pipeline errors that abort a run."""


class SchemaError(PaysurveyError):
    """
    Raised when a survey file does not match the expected column layout.

    Attributes:
        positions: 1-based column positions that failed the header check.
    """

    def __init__(self, message: str, positions: list[int] | None = None) -> None:
        super().__init__(message)
        self.positions = positions or []
