"""Auth gateway -- login and registration against the backend."""

from __future__ import annotations

from typing import Protocol

from kudos_wall.auth.errors import InvalidCredentialsError, UserAlreadyExistsError
from kudos_wall.auth.models import LoginRequest, RegisterRequest, Session
from kudos_wall.auth.schemas import LoginResponse, RegisterResponse
from kudos_wall.config import ApiPaths
from kudos_wall.errors import UserNotFoundError
from kudos_wall.http import HttpClient, HttpError


class AuthGateway(Protocol):
    async def login(self, request: LoginRequest) -> Session: ...

    async def register(self, request: RegisterRequest) -> Session: ...


class HttpAuthGateway:
    """Translate auth HTTP failures into domain errors.

    Only 401/404 (login) and 409 (register) are translated; every other
    :class:`HttpError` propagates unchanged. Input is not validated here.
    """

    def __init__(self, http: HttpClient, paths: ApiPaths) -> None:
        self._http = http
        self._paths = paths

    async def login(self, request: LoginRequest) -> Session:
        try:
            body = await self._http.post(
                self._paths.login,
                body={"email": request.email, "password": request.password},
            )
        except HttpError as e:
            if e.status_code == 401:
                raise InvalidCredentialsError() from e
            if e.status_code == 404:
                raise UserNotFoundError(request.email) from e
            raise
        return LoginResponse.model_validate(body).to_session()

    async def register(self, request: RegisterRequest) -> Session:
        try:
            body = await self._http.post(
                self._paths.register,
                body={"name": request.name, "email": request.email, "password": request.password},
            )
        except HttpError as e:
            if e.status_code == 409:
                raise UserAlreadyExistsError(request.email) from e
            raise
        return RegisterResponse.model_validate(body).to_session()
