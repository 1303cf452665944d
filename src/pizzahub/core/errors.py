"""
Иерархия ошибок витрины.

CRUD-слой бросает эти исключения, обработчики в main.py переводят их
в JSON-ответ вида {"error": message} с соответствующим HTTP-статусом.
"""


class StorefrontError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class EmptyCartError(ValidationError):
    default_message = "Cart is empty"


class ConflictError(StorefrontError):
    status_code = 400
    default_message = "User with this email already exists"


class InvalidCredentialsError(StorefrontError):
    status_code = 400
    default_message = "Invalid email or password"


class WrongPasswordError(StorefrontError):
    status_code = 400
    default_message = "Current password is incorrect"


class AuthError(StorefrontError):
    status_code = 401
    default_message = "Authorization required"


class MissingTokenError(AuthError):
    pass


class InvalidTokenError(AuthError):
    status_code = 403
    default_message = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    default_message = "Token expired"


class ForbiddenError(AuthError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ServerError(StorefrontError):
    pass
