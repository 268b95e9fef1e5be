"""
Exception hierarchy shared by services and API handlers
"""


class EngPalError(Exception):
    """Base class for all application errors"""


class InvalidRequestError(EngPalError):
    """Client input failed validation (reported as HTTP 400)"""


class GenerationError(EngPalError):
    """Generation could not produce a usable result"""


class UpstreamError(GenerationError):
    """The Gemini call failed, timed out or the client is missing"""


class ResponseParseError(GenerationError):
    """The model answered but its text could not be parsed"""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
