"""Domain layer errors."""

from anemi.domain.value import InviteStatus


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input that violates a domain rule (malformed or missing fields)."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found (or soft-deleted)."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a caller attempts to modify an invite they don't own."""

    def __init__(self, resource: str, resource_id: str, caller: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{caller} is not authorized to modify {resource} {resource_id}")


class InviteExpiredError(BusinessRuleViolationError):
    """Raised when acting on an invite whose ``expires_at`` has passed."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__("Invite has expired")


class InviteConflictError(BusinessRuleViolationError):
    """Raised when an invite has already been accepted or declined."""

    status: InviteStatus

    @staticmethod
    def for_status(status: InviteStatus) -> "InviteConflictError":
        """Build the conflict error matching the invite's terminal status."""
        if status == InviteStatus.CONFIRMED:
            return AlreadyConfirmedError()
        if status == InviteStatus.DECLINED:
            return AlreadyDeclinedError()
        raise ValueError(f"Invite status {status.value} is not terminal")


class AlreadyConfirmedError(InviteConflictError):
    """Someone already accepted this invite."""

    status = InviteStatus.CONFIRMED

    def __init__(self) -> None:
        super().__init__("Invite already confirmed")


class AlreadyDeclinedError(InviteConflictError):
    """Someone already declined this invite."""

    status = InviteStatus.DECLINED

    def __init__(self) -> None:
        super().__init__("Invite already declined")


class RateLimitExceededError(DomainError):
    """Raised when a client exceeded the allowed request rate."""

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__("Too many requests, please try again later")
