class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

class ResourceNotFoundError(AppError):
    """Raised when a conflict, schedule entry or teacher is not found."""
    def __init__(self, resource_type: str, resource_id):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id

class InvalidSuggestionError(AppError):
    """Raised when a suggestion is unknown to its conflict or is missing its action fields."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, details=details)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message)
