# File: common/exceptions/base_exception.py


class OtpPortalException(Exception):
    """Base class for infrastructure faults raised below the handlers."""

    def __init__(self, detail: str = "Unexpected infrastructure error."):
        super().__init__(detail)
        self.detail = detail


class StoreUnavailableException(OtpPortalException):
    def __init__(self, detail: str = "OTP store temporarily unavailable."):
        super().__init__(detail)


class EmailDeliveryException(OtpPortalException):
    def __init__(self, recipient: str, detail: str = "Email could not be delivered."):
        super().__init__(f"{detail} (to: {recipient})")
        self.recipient = recipient
