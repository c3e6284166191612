class ResumeParserError(Exception):
    """Base class for parser failures."""


class InvalidInputError(ResumeParserError, ValueError):
    """
    Raised when the parser is handed something that is not text.

    Malformed or oddly formatted text never raises; it degrades to empty fields.
    Only a hard precondition violation (None, bytes, numbers) ends up here.
    """

    def __init__(self, message: str = "Resume text must be a string."):
        super().__init__(message)
