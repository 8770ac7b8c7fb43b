"""Domain exceptions."""


class SalatKitError(Exception):
    """Base class for salat-kit errors."""


class EmptyInputError(SalatKitError, ValueError):
    """Boş vakit listesi verildiğinde."""


class NotFoundError(SalatKitError, LookupError):
    """Aranan vakit listede bulunamadığında."""


class LocationUnavailableError(SalatKitError):
    """Henüz bir konum bilgisi yokken konum gerektiren işlem çağrıldığında."""
