"""Invite-key login.

Endpoint:
  POST /login — check an invite code, return its key id
"""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy.orm import Session

from ..agents.idea_analyzer import pipeline
from ..database import get_db
from ..errors import LaunchpadError, RequestValidationError
from ..schemas.analysis_schema import LoginRequest, LoginResponse


def _login_failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"valid": False, "error": message})


class LoginRoute(APIRoute):
    """Malformed login bodies keep the ``{valid: false, error}`` shape."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def login_route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except BodyValidationError:
                return _login_failure(
                    RequestValidationError.status_code,
                    RequestValidationError.default_message,
                )

        return login_route_handler


router = APIRouter(tags=["Auth"], route_class=LoginRoute)


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Log in with an invite key",
)
def login_with_key(payload: LoginRequest, db: Session = Depends(get_db)):
    """Return ``{valid: true, keyId}`` for a known key.

    Failures keep the login response shape: ``{valid: false, error}``.
    """
    try:
        return pipeline.login(db, payload.key)
    except LaunchpadError as exc:
        return _login_failure(exc.status_code, exc.message)
