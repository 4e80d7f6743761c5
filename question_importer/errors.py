class QuestionImportError(Exception):
    """Base class for failures while turning a PDF into questions."""


class PdfExtractionError(QuestionImportError):
    """The uploaded bytes could not be opened as a PDF."""


class GeminiConfigError(QuestionImportError):
    """No API key available for the Gemini call."""


class GeminiAPIError(QuestionImportError):
    """Gemini answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyModelResponseError(QuestionImportError):
    """None of the known response shapes carried any text."""
