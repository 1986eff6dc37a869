"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class EmailDeliveryError(AdapterError):
    """The email provider rejected or failed to accept a message."""

    pass
