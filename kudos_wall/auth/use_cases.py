"""Login and registration use cases."""

from __future__ import annotations

from kudos_wall.auth.gateway import AuthGateway
from kudos_wall.auth.models import LoginRequest, RegisterRequest, Session
from kudos_wall.result import Err, Failure, Ok, Result


class LoginUser:
    def __init__(self, gateway: AuthGateway) -> None:
        self._gateway = gateway

    async def execute(self, request: LoginRequest) -> Result[Session]:
        try:
            return Ok(await self._gateway.login(request))
        except Exception as e:
            return Err(Failure.from_exception(e))


class RegisterUser:
    def __init__(self, gateway: AuthGateway) -> None:
        self._gateway = gateway

    async def execute(self, request: RegisterRequest) -> Result[Session]:
        try:
            return Ok(await self._gateway.register(request))
        except Exception as e:
            return Err(Failure.from_exception(e))
