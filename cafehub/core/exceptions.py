from typing import Optional, Any

class CafeHubError(Exception):
    """
    Base exception for CafeHub application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class InvalidIdentifierError(CafeHubError):
    """
    Raised when a path identifier is not a well-formed ObjectId.
    """
    def __init__(self, message: str = "Invalid identifier", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_IDENTIFIER", status_code=400, details=details)

class ResourceNotFoundError(CafeHubError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class IdentityProviderError(CafeHubError):
    """
    Raised when a Firebase Authentication call fails.
    """
    def __init__(self, message: str = "Identity provider error", details: Optional[Any] = None):
        super().__init__(message, code="IDENTITY_PROVIDER_ERROR", status_code=502, details=details)

class UserDeletionError(CafeHubError):
    """
    Raised when the cascading user delete fails part-way.
    """
    def __init__(self, message: str = "Failed to delete user", details: Optional[Any] = None):
        super().__init__(message, code="USER_DELETE_FAILED", status_code=500, details=details)
