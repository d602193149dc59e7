from fastapi import APIRouter, HTTPException, Request, status
from showcase.config import get_settings
from showcase.models.schemas import SalespersonSignIn, SalespersonSignInResponse
from showcase.services.salesperson_gate import SalespersonGate, INVALID_SIGN_IN_MESSAGE
from showcase.utils.rate_limit import limiter

router = APIRouter()


@router.post("/salesperson/sign-in", response_model=SalespersonSignInResponse)
@limiter.limit("10/minute")  # Rate limit: 10 sign-in attempts per minute per IP
def sign_in(request: Request, credentials: SalespersonSignIn):
    """
    Check a salesperson name + upload code pair.

    Nothing is stored server-side; the client keeps its own signed-in flag.
    """
    settings = get_settings()
    gate = SalespersonGate(settings.upload_code, settings.upload_bypass_code)
    if not gate.check(credentials.name, credentials.code):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_SIGN_IN_MESSAGE,
        )
    return SalespersonSignInResponse(authenticated=True, salesperson_name=credentials.name.strip())
