"""
Domain errors raised by the Noteful API.

Every failure a request can report is one of these. The exception handler
registered in `main` turns them into a JSON body with a `message` key.
"""
from typing import Optional


class NotefulError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


# ---- Request body validation ----

class MissingField(NotefulError):
    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Missing `{field}` in request body")


class NotASequence(NotefulError):
    default_message = "The `tags` must be an array"


class MalformedId(NotefulError):
    def __init__(self, field: str = "id"):
        self.field = field
        super().__init__(f"The `{field}` is not valid")


# ---- Credential shape ----

class CredentialsValidationError(NotefulError):
    """Shape violation on a registration payload."""

    status_code = 422
    reason = "ValidationError"

    def __init__(self, message: str, location: Optional[str] = None):
        self.location = location
        super().__init__(message)

    def to_dict(self) -> dict:
        body = {"message": self.message, "reason": self.reason}
        if self.location:
            body["location"] = self.location
        return body


class MissingCredential(CredentialsValidationError):
    def __init__(self, field: str):
        super().__init__(f"Missing '{field}' in request body", location=field)


class TypeMismatch(CredentialsValidationError):
    def __init__(self, field: str):
        super().__init__(f"incorrect field type: expected {field} to be string", location=field)


class WhitespaceViolation(CredentialsValidationError):
    def __init__(self, field: str):
        super().__init__("password or username cannot start or end with whitespace", location=field)


class TooShort(CredentialsValidationError):
    def __init__(self, field: str, minimum: int):
        super().__init__(f"Must be at least {minimum} characters long", location=field)


class TooLong(CredentialsValidationError):
    def __init__(self, field: str, maximum: int):
        super().__init__(f"Must be at most {maximum} characters long", location=field)


# ---- References ----

class UnknownOrForeignFolder(NotefulError):
    default_message = "The `folderId` is not valid"


class UnknownOrForeignTag(NotefulError):
    default_message = "The `tags` contains an invalid id"


# ---- Store outcomes ----

class DuplicateName(NotefulError):
    def __init__(self, entity: str = "Folder"):
        super().__init__(f"{entity} name already exists")


class DuplicateUsername(NotefulError):
    default_message = "Username already taken"

    def to_dict(self) -> dict:
        return {"message": self.message, "reason": "ValidationError", "location": "username"}


class NotFound(NotefulError):
    status_code = 404
    default_message = "Not Found"


class StorageFailure(NotefulError):
    status_code = 500
    default_message = "Internal Server Error"
