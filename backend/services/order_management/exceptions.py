"""Custom exceptions for order matching and assignment."""


class MatchingError(Exception):
    """Base class; carries the machine-readable kind and HTTP status for the API layer."""
    error_code = "matching_error"
    status_code = 400
    default_message = "Order matching failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DriverNotFoundError(MatchingError):
    """Raised when no driver profile exists for the requesting user."""
    error_code = "driver_not_found"
    status_code = 404
    default_message = "Driver not found"


class LocationUnavailableError(MatchingError):
    """Raised when the driver has no current coordinates."""
    error_code = "location_unavailable"
    status_code = 400
    default_message = "Driver location not available. Please update your location."


class OrderNotFoundError(MatchingError):
    """Raised when an order cannot be found."""
    error_code = "order_not_found"
    status_code = 404
    default_message = "Order not found"


class AlreadyAssignedError(MatchingError):
    """Raised when another driver took the order first."""
    error_code = "already_assigned"
    status_code = 409
    default_message = "Order has already been assigned to another driver"


class InvalidActionError(MatchingError):
    """Raised for an order action other than accept or reject."""
    error_code = "invalid_action"
    status_code = 400
    default_message = 'Invalid action. Use "accept" or "reject"'


class InvalidStatusTransitionError(MatchingError):
    """Raised when a delivery status change does not move the order forward."""
    error_code = "invalid_status_transition"
    status_code = 400
    default_message = "Invalid delivery status transition"
