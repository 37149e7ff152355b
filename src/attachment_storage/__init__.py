"""S3 storage backend for model file attachments."""

__version__ = "1.0.0"
__description__ = (
    "Object storage backend that persists attachment styles to Amazon S3"
)

__all__ = ["models", "interpolation", "infrastructure", "repositories", "utils"]
