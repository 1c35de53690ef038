"""Application error taxonomy.

Every error carries a stable ``kind`` for clients, a user displayable
``message`` and the HTTP status it is rendered with. Storage errors are
translated into one of these before leaving a store.
"""


class EduEgyError(Exception):
    """Base exception for service layer errors."""

    kind = "error"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self):
        return self.message


class NotFound(EduEgyError):
    kind = "not_found"
    status_code = 404
    default_message = "Resource not found"


class InvalidOrExpiredCode(EduEgyError):
    """Raised when a linking code is unknown, used or past its expiry."""

    kind = "invalid_or_expired_code"
    status_code = 400
    default_message = "The linking code is invalid or has expired"


class LinkAlreadyExists(EduEgyError):
    """Raised when a parent already holds a link request for the student."""

    kind = "link_already_exists"
    status_code = 400
    default_message = "A link request already exists for this student"


class DuplicateLink(LinkAlreadyExists):
    """Store level uniqueness violation on (parent, student)."""


class InvalidTransition(EduEgyError):
    """Raised when deciding a link request that is no longer pending."""

    kind = "invalid_transition"
    status_code = 409
    default_message = "The link request has already been decided"


class CodeCollision(EduEgyError):
    """Raised when a generated linking code clashes with an existing one.

    Always retryable.
    """

    kind = "code_collision"
    status_code = 409
    default_message = "Generated linking code is already taken"


class CodeGenerationFailed(EduEgyError):
    kind = "code_generation_failed"
    status_code = 503
    default_message = "Could not generate a linking code, please try again"


class UserAlreadyExists(EduEgyError):
    kind = "user_already_exists"
    status_code = 400
    default_message = "A user with this email or username already exists"
