"""Domain exceptions raised by services."""


class FoodLogNotFoundError(LookupError):
    """Raised when a food log entry does not exist."""


class FavouriteNotFoundError(LookupError):
    """Raised when a favourite food does not exist."""


class NotFoodError(ValueError):
    """Raised when a description is not about food."""


class NoFoodDetectedError(ValueError):
    """Raised when no food could be identified in a photo."""


class InvalidBarcodeError(ValueError):
    """Raised when a barcode is too short to look up."""
