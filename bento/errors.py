class BentoError(Exception):
    pass


class NetworkError(BentoError):
    """The generation backend could not be reached or refused the request."""


class ImageAnalysisError(BentoError):
    """An image could not be turned into ingredient text."""


class ParseError(BentoError):
    """The generation backend did not answer with JSON.

    The raw text is kept for logging only. It is not part of the message.
    """

    def __init__(self, message: str, *, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ValidationError(BentoError):
    """The JSON does not match the plan shape for the requested mode."""
