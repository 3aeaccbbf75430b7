from fastapi import status

class BaseAppException(Exception):
    """Base class for all app-specific exceptions."""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

class BusinessValidationException(BaseAppException):
    """Invalid input or business rule violation."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.details = details or {}

class SessionNotFoundException(BaseAppException):
    """Unknown or expired landing session."""
    def __init__(self, session_id: str):
        super().__init__(f"Session '{session_id}' not found or expired", status.HTTP_404_NOT_FOUND)
        self.session_id = session_id

class MapUnavailableException(BaseAppException):
    """Mapping provider is not configured; the map cannot be loaded."""
    def __init__(self, message: str = "Ошибка загрузки карты"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)

class GeocodingException(BaseAppException):
    """Autocomplete, geocode or reverse-geocode call failed or found nothing."""
    def __init__(
        self,
        message: str = "Geocoding request failed",
        provider_status: str = None,
        details: dict = None
    ):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)
        self.provider_status = provider_status
        self.details = details or {}
