"""
Error taxonomy shared by storage, auth and the HTTP layer
"""
from typing import Any, Dict, Optional


class PortfolioError(Exception):
    """Base class for errors that map onto an HTTP status"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Error body sent to clients"""
        return {"message": self.message}


class ValidationError(PortfolioError):
    """Malformed or missing input field"""

    status_code = 400
    default_message = "Invalid input"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "field": self.field}

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Build from a pydantic ValidationError, keeping the first failing field"""
        errors = exc.errors()
        if not errors:
            return cls(str(exc))
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body",))
        return cls(first.get("msg", "Invalid input"), field=field or None)


class Unauthorized(PortfolioError):
    """No or invalid session on a protected route"""

    status_code = 401
    default_message = "Authentication required"


class NotFound(PortfolioError):
    """Referenced id does not exist"""

    status_code = 404
    default_message = "Not found"


class InternalError(PortfolioError):
    """Store unavailable or unexpected failure; message is always generic"""

    status_code = 500
    default_message = "Internal server error"
