"""Create and list kudo cards."""

from __future__ import annotations

import structlog

from kudos_wall.auth.guard import has_permission
from kudos_wall.auth.models import Role, UserProfile
from kudos_wall.kudos.errors import (
    FailedToRetrieveKudosError,
    InvalidKudoCardPropertyError,
    KudoCardCreationError,
    UserNotAuthorizedToCreateKudoError,
)
from kudos_wall.kudos.models import CreateKudoCardRequest, CreateKudoCardResponse, KudoCard, KudoCardDetails
from kudos_wall.kudos.repository import KudosRepository
from kudos_wall.result import Err, Failure, Ok, Result

logger = structlog.get_logger()

KUDO_GIVERS = frozenset({Role.tech_lead, Role.admin})


class CreateKudoCard:
    """Validate a request, build the card and persist it.

    Only tech leads and admins may give kudos. Validation failures keep
    their own error; anything else the repository raises is reported as
    :class:`KudoCardCreationError`.
    """

    def __init__(self, repository: KudosRepository) -> None:
        self._repository = repository

    async def execute(self, request: CreateKudoCardRequest, giver: UserProfile) -> Result[CreateKudoCardResponse]:
        try:
            return Ok(await self._create(request, giver))
        except (InvalidKudoCardPropertyError, UserNotAuthorizedToCreateKudoError) as e:
            return Err(Failure.from_exception(e))
        except Exception as e:
            logger.warning("kudo_creation_failed", error=str(e))
            wrapped = KudoCardCreationError(str(e) or "Unknown error creating kudo card")
            return Err(Failure(wrapped.code, wrapped.message, cause=e))

    async def _create(self, request: CreateKudoCardRequest, giver: UserProfile) -> CreateKudoCardResponse:
        if not has_permission(giver, KUDO_GIVERS):
            raise UserNotAuthorizedToCreateKudoError(role=giver.role.value if giver else None)

        errors = request.validate()
        if errors:
            raise InvalidKudoCardPropertyError(", ".join(errors), errors=errors)

        card = KudoCard.create(
            recipient_name=request.recipient_name,
            team_id=request.team_id,
            category_id=request.category_id,
            message=request.message,
            team_name=request.team_name,
            category_name=request.category_name,
            giver_id=giver.id,
            giver_name=giver.name,
            giver_email=giver.email,
        )
        card_id = await self._repository.create(card)
        logger.info("kudo_created", card_id=card_id, giver_id=giver.id)
        return CreateKudoCardResponse(id=card_id, success=True)


class ListKudoCards:
    def __init__(self, repository: KudosRepository) -> None:
        self._repository = repository

    async def execute(self) -> Result[list[KudoCardDetails]]:
        try:
            cards = await self._repository.list_all()
        except Exception as e:
            logger.warning("kudo_listing_failed", error=str(e))
            wrapped = FailedToRetrieveKudosError(str(e) or "Unknown error retrieving kudo cards")
            return Err(Failure(wrapped.code, wrapped.message, cause=e))
        return Ok([KudoCardDetails.from_card(card) for card in cards])
