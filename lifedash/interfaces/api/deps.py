"""FastAPI dependencies: the services and the caller's context."""

from typing import Annotated

from fastapi import Depends, Header, Request

from lifedash.application import Services, UserContext


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_user(
    services: Annotated[Services, Depends(get_services)],
    x_user_id: Annotated[int | None, Header()] = None,
) -> UserContext:
    """Caller from the ``X-User-Id`` header, else the configured default user."""
    user_id = x_user_id if x_user_id is not None else services.settings.default_user_id
    return UserContext(user_id=user_id)


ServicesDep = Annotated[Services, Depends(get_services)]
UserDep = Annotated[UserContext, Depends(get_user)]
