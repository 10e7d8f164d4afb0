"""Exceptions raised by the CV generator and gap checker."""


class CareerOptimizerError(Exception):
    """Base class for errors surfaced to the web and CLI layers."""


class CVInputError(CareerOptimizerError, ValueError):
    """Raised when no usable CV text can be produced from the user's input."""


class ModelResponseError(CareerOptimizerError, ValueError):
    """Raised when the model reply is not JSON or does not match the declared schema."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class MissingAPIKeyError(CareerOptimizerError):
    """Raised when no Groq API key is available and mock mode is off."""
