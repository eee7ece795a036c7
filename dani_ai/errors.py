"""Exception types for the Dani.ai photo editor."""


class PhotoEditError(Exception):
    """Base class for all photo editor errors.

    The string form of every subclass is a message that can be shown to the
    user as-is.
    """


class ConfigurationError(PhotoEditError):
    """Raised when required configuration (such as the API key) is missing."""


class InvalidInputError(PhotoEditError):
    """Raised when a supplied file is not an image."""


class CameraUnavailableError(PhotoEditError):
    """Raised when no camera could be opened (no device or permission denied)."""


class GenerationError(PhotoEditError):
    """Raised when the image generation request fails or returns no image."""


class NoImageError(PhotoEditError):
    """Raised when a generation is triggered without a loaded image."""


class GenerationInProgressError(PhotoEditError):
    """Raised when a generation is triggered while another one is running."""
