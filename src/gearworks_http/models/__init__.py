from .exceptions import ApiError, BaseUrlMissingError

__all__ = ["ApiError", "BaseUrlMissingError"]
