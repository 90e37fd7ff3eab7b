# File: api/routers/otp.py

from fastapi import APIRouter, Depends

from otp_portal.api.dependencies import get_request_otp_handler, get_validate_otp_handler
from otp_portal.api.result_mapping import to_response
from otp_portal.domain.auth.entities.commands import RequestOtpCommand, ValidateOtpCommand
from otp_portal.domain.auth.services.request_otp_service import RequestOtpHandler
from otp_portal.domain.auth.services.validate_otp_service import ValidateOtpHandler

router = APIRouter(prefix="/auth/otp", tags=["Auth"])


@router.post("/request")
async def request_otp(
        data: RequestOtpCommand,
        handler: RequestOtpHandler = Depends(get_request_otp_handler)
):
    """
    Email a one-time password to the given address.

    Returns 200 with the expiry instant, 400 with field errors, or 504 when the
    store or the mail relay could not be reached.
    """
    return to_response(await handler.handle(data))


@router.post("/validate")
async def validate_otp(
        data: ValidateOtpCommand,
        handler: ValidateOtpHandler = Depends(get_validate_otp_handler)
):
    """Check a one-time password previously sent to the given address."""
    return to_response(await handler.handle(data))
