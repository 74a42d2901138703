"""
Custom exceptions for the SignAI assistant.

Each exception carries the message shown to the operator.
"""


class SignAIError(Exception):
    """Base exception for SignAI errors."""
    pass


class EmptySentenceError(SignAIError):
    """Raised when there is no assembled sentence to speak or translate."""
    pass


class NothingToExportError(SignAIError):
    """Raised when exporting an empty conversation log."""
    pass


class ExportFailedError(SignAIError):
    """Raised when the export file cannot be written."""
    pass


class CameraNotFoundError(SignAIError):
    """Raised when the camera cannot be opened."""
    pass


class TranslationError(SignAIError):
    """Base exception for translation failures."""
    pass


class TranslationConnectionError(TranslationError):
    """Raised when the translation service cannot be reached."""
    pass


class TranslationServiceError(TranslationError):
    """Raised when the translation service answers with an error."""
    pass


class PoorTranslationError(TranslationError):
    """Raised when the returned translation is unusable."""
    pass
