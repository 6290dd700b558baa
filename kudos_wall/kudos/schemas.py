"""Wire shapes for kudo cards.

The backend and older exports describe a card in three different ways.
Each shape is a pydantic model that knows how to turn itself into a
:class:`~kudos_wall.kudos.models.KudoCard`; the right model is picked once,
at the API boundary, by :func:`payload_kind`::

    api      {"recipientName", "teamId", "categoryId", "giverId", ...}
    legacy   {"recipient": "Ana", "team", "category", "from": {"name", "date"}}
    wall     {"recipient": {"name", ...}, "from": {"name", ...}, "category", "date"}

A payload carrying an explicit ``"kind"`` key is decoded as that shape.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, field_validator

from kudos_wall.kudos.catalog import find_category, find_team
from kudos_wall.kudos.models import KudoCard


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass
    # older exports use "May 10, 2023"
    try:
        return datetime.strptime(value, "%B %d, %Y").replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def _team_ref(name: str) -> tuple[str, str]:
    team = find_team(name) if name else None
    return (team.id, team.name) if team else (name, name)


def _category_ref(name: str) -> tuple[str, str]:
    category = find_category(name) if name else None
    return (category.id, category.name) if category else (name, name)


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


class ApiKudoPayload(_Payload):
    """The current backend shape, as returned by ``GET /kudocards``."""

    kind: Optional[Literal["api"]] = None
    id: Union[str, int]
    message: str
    recipient_name: str = Field(alias="recipientName")
    giver_id: str = Field(default="", alias="giverId")
    giver_email: str = Field(default="", alias="giverEmail")
    giver_name: str = Field(default="", alias="giverName")
    team_id: str = Field(default="", alias="teamId")
    team_name: str = Field(default="", alias="teamName")
    category_id: str = Field(default="", alias="categoryId")
    category_name: str = Field(default="", alias="categoryName")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    def to_card(self) -> KudoCard:
        return KudoCard.reconstitute(
            id=str(self.id),
            recipient_name=self.recipient_name,
            team_id=self.team_id,
            category_id=self.category_id,
            message=self.message,
            giver_id=self.giver_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            team_name=self.team_name,
            category_name=self.category_name,
            giver_name=self.giver_name,
            giver_email=self.giver_email,
        )


class LegacySender(_Payload):
    name: str
    date: Optional[str] = None


class LegacyKudoPayload(_Payload):
    """Flat shape with the recipient as a plain string."""

    kind: Optional[Literal["legacy"]] = None
    id: Union[str, int]
    recipient: str
    team: str = ""
    category: str = ""
    message: str
    sender: LegacySender = Field(alias="from")

    def to_card(self) -> KudoCard:
        team_id, team_name = _team_ref(self.team)
        category_id, category_name = _category_ref(self.category)
        return KudoCard.reconstitute(
            id=str(self.id),
            recipient_name=self.recipient,
            team_id=team_id,
            category_id=category_id,
            message=self.message,
            giver_id="",
            created_at=_parse_date(self.sender.date),
            team_name=team_name,
            category_name=category_name,
            giver_name=self.sender.name,
        )


class WallPerson(_Payload):
    name: str
    avatar: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None


class WallKudoPayload(_Payload):
    """Card shape with nested recipient and sender objects."""

    kind: Optional[Literal["wall"]] = None
    id: Union[str, int]
    recipient: WallPerson
    sender: WallPerson = Field(alias="from")
    message: str
    category: str = ""
    date: Optional[str] = None

    def to_card(self) -> KudoCard:
        team_id, team_name = _team_ref(self.recipient.department or "")
        category_id, category_name = _category_ref(self.category)
        return KudoCard.reconstitute(
            id=str(self.id),
            recipient_name=self.recipient.name,
            team_id=team_id,
            category_id=category_id,
            message=self.message,
            giver_id="",
            created_at=_parse_date(self.date),
            team_name=team_name,
            category_name=category_name,
            giver_name=self.sender.name,
        )


def payload_kind(value: Any) -> Optional[str]:
    """Name the shape of a raw card payload."""
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True)
    if not isinstance(value, dict):
        return None
    kind = value.get("kind")
    if kind:
        return kind
    if "recipientName" in value or "recipient_name" in value:
        return "api"
    if isinstance(value.get("recipient"), dict):
        return "wall"
    return "legacy"


KudoPayload = Annotated[
    Union[
        Annotated[ApiKudoPayload, Tag("api")],
        Annotated[LegacyKudoPayload, Tag("legacy")],
        Annotated[WallKudoPayload, Tag("wall")],
    ],
    Discriminator(payload_kind),
]

_payload_adapter: TypeAdapter[Any] = TypeAdapter(KudoPayload)


def decode_card(raw: Any) -> KudoCard:
    """Decode one card payload of any known shape."""
    return _payload_adapter.validate_python(raw).to_card()


class KudoCardList(BaseModel):
    """``{kudoCards, total}`` envelope returned by ``GET /kudocards``."""

    kudo_cards: list[KudoPayload] = Field(default_factory=list, alias="kudoCards")
    total: int = 0

    @field_validator("kudo_cards", mode="before")
    @classmethod
    def _missing_as_empty(cls, v: object) -> object:
        return v or []

    def to_cards(self) -> list[KudoCard]:
        return [payload.to_card() for payload in self.kudo_cards]


class CreateKudoCardAck(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Union[str, int]
    success: bool = True
