"""Auth API Routes

Thin boundary over the external identity provider: session check and sign-out.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from fluxinvoice.api.schemas.invoice_request import SessionResponseSchema
from fluxinvoice.app.services.identity_provider import IdentityProvider
from fluxinvoice.depends import get_bearer_token, get_identity_provider

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/session", response_model=SessionResponseSchema)
def get_session_state(
    token: Optional[str] = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """Report whether the caller has a signed-in session"""
    return SessionResponseSchema(authenticated=identity.is_authenticated(token))


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    token: Optional[str] = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    identity.sign_out(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
