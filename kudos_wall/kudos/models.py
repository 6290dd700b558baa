"""Kudo card domain entity."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from kudos_wall.kudos.errors import InvalidKudoCardPropertyError

MAX_RECIPIENT_NAME_LENGTH = 100
MAX_MESSAGE_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class KudoCard:
    """A single peer-recognition record.

    Build new cards with :meth:`create` (validated) and cards read back
    from the backend with :meth:`reconstitute` (trusted).
    """

    id: str
    recipient_name: str
    team_id: str
    category_id: str
    message: str
    giver_id: str
    created_at: datetime
    updated_at: datetime
    team_name: str = ""
    category_name: str = ""
    giver_name: str = ""
    giver_email: str = ""

    @property
    def author_id(self) -> str:
        return self.giver_id

    @classmethod
    def create(
        cls,
        *,
        recipient_name: str,
        team_id: str,
        category_id: str,
        message: str,
        giver_id: str,
        team_name: Optional[str] = None,
        category_name: Optional[str] = None,
        giver_name: Optional[str] = None,
        giver_email: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "KudoCard":
        """Validate the properties and build a card stamped with the current time.

        Raises :class:`InvalidKudoCardPropertyError` on the first violation.
        """
        if not recipient_name:
            raise InvalidKudoCardPropertyError("Recipient name is required", field="recipient_name")
        if len(recipient_name) > MAX_RECIPIENT_NAME_LENGTH:
            raise InvalidKudoCardPropertyError(
                f"Recipient name must be between 1 and {MAX_RECIPIENT_NAME_LENGTH} characters",
                field="recipient_name",
                max_length=MAX_RECIPIENT_NAME_LENGTH,
            )
        if not team_id:
            raise InvalidKudoCardPropertyError("Team ID is required", field="team_id")
        if not category_id:
            raise InvalidKudoCardPropertyError("Category ID is required", field="category_id")
        if not message:
            raise InvalidKudoCardPropertyError("Message is required", field="message")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise InvalidKudoCardPropertyError(
                f"Message must be between 1 and {MAX_MESSAGE_LENGTH} characters",
                field="message",
                max_length=MAX_MESSAGE_LENGTH,
            )
        if not giver_id:
            raise InvalidKudoCardPropertyError("Giver ID is required", field="giver_id")

        stamp = now or _utcnow()
        return cls(
            id="",
            recipient_name=recipient_name,
            team_id=team_id,
            category_id=category_id,
            message=message,
            giver_id=giver_id,
            created_at=stamp,
            updated_at=stamp,
            team_name=team_name or "",
            category_name=category_name or "",
            giver_name=giver_name or "",
            giver_email=giver_email or "",
        )

    @classmethod
    def reconstitute(
        cls,
        *,
        id: str,
        recipient_name: str,
        team_id: str,
        category_id: str,
        message: str,
        giver_id: str,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        team_name: str = "",
        category_name: str = "",
        giver_name: str = "",
        giver_email: str = "",
    ) -> "KudoCard":
        created = created_at or _utcnow()
        return cls(
            id=id,
            recipient_name=recipient_name,
            team_id=team_id,
            category_id=category_id,
            message=message,
            giver_id=giver_id,
            created_at=created,
            updated_at=updated_at or created,
            team_name=team_name,
            category_name=category_name,
            giver_name=giver_name,
            giver_email=giver_email,
        )

    def to_primitives(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CreateKudoCardRequest:
    """Form input for a new kudo card."""

    recipient_name: str
    team_id: str
    category_id: str
    message: str
    team_name: Optional[str] = None
    category_name: Optional[str] = None

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.recipient_name:
            errors.append("Recipient name is required")
        elif len(self.recipient_name) > MAX_RECIPIENT_NAME_LENGTH:
            errors.append(f"Recipient name must be between 1 and {MAX_RECIPIENT_NAME_LENGTH} characters")
        if not self.team_id:
            errors.append("Team ID is required")
        if not self.category_id:
            errors.append("Category ID is required")
        if not self.message:
            errors.append("Message is required")
        elif len(self.message) > MAX_MESSAGE_LENGTH:
            errors.append(f"Message must be between 1 and {MAX_MESSAGE_LENGTH} characters")
        return errors


@dataclass(frozen=True)
class CreateKudoCardResponse:
    id: str
    success: bool


@dataclass(frozen=True)
class KudoCardDetails:
    """Read model of a card for listing."""

    id: str
    recipient_name: str
    team_id: str
    team_name: str
    category_id: str
    category_name: str
    message: str
    author_id: str
    giver_name: str
    created_at: datetime

    @classmethod
    def from_card(cls, card: KudoCard) -> "KudoCardDetails":
        return cls(
            id=card.id,
            recipient_name=card.recipient_name,
            team_id=card.team_id,
            team_name=card.team_name,
            category_id=card.category_id,
            category_name=card.category_name,
            message=card.message,
            author_id=card.author_id,
            giver_name=card.giver_name,
            created_at=card.created_at,
        )
