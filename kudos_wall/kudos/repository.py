"""Kudo card persistence over the REST API."""

from __future__ import annotations

from typing import Protocol

import structlog

from kudos_wall.config import ApiPaths
from kudos_wall.http import HttpClient, HttpError
from kudos_wall.kudos.errors import InvalidKudoCardPropertyError
from kudos_wall.kudos.models import KudoCard
from kudos_wall.kudos.schemas import CreateKudoCardAck, KudoCardList

logger = structlog.get_logger()


class KudosRepository(Protocol):
    async def create(self, card: KudoCard) -> str: ...

    async def list_all(self) -> list[KudoCard]: ...


class KudosApiRepository:
    def __init__(self, http: HttpClient, paths: ApiPaths) -> None:
        self._http = http
        self._paths = paths

    async def create(self, card: KudoCard) -> str:
        """POST the card and return the id the backend assigned."""
        body = {
            "recipientName": card.recipient_name,
            "teamId": card.team_id,
            "categoryId": card.category_id,
            "message": card.message,
        }
        try:
            ack = await self._http.post(self._paths.kudo_cards, body=body)
        except HttpError as e:
            if e.status_code == 400:
                raise InvalidKudoCardPropertyError("Invalid kudo card data") from e
            raise
        return str(CreateKudoCardAck.model_validate(ack).id)

    async def list_all(self) -> list[KudoCard]:
        """Return every card on the wall; a 404 means the wall is empty."""
        try:
            body = await self._http.get(self._paths.kudo_cards)
        except HttpError as e:
            if e.status_code == 404:
                logger.debug("kudo_cards_not_found")
                return []
            raise
        return KudoCardList.model_validate(body or {}).to_cards()
