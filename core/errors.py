# core/errors.py


class IngredientCheckError(Exception):
    """Base class for every error raised by the analysis pipeline."""


class ClientInputError(IngredientCheckError):
    """The request carried no usable image. Maps to HTTP 400."""


class ExternalServiceError(IngredientCheckError):
    """
    Gemini could not be reached or returned something unusable
    (network, auth, quota, malformed response). Maps to HTTP 500.
    """


class ResourceLoadError(IngredientCheckError):
    """Term list file could not be read. Absorbed by the matcher."""


class RenderError(IngredientCheckError):
    """Image decode/encode failed. Absorbed by the normalizer."""
