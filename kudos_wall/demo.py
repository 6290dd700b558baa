"""In-memory backend used when ``demo_mode`` is on.

Every class here satisfies the same protocol as its HTTP counterpart and
raises the same domain errors, so the rest of the app cannot tell the
difference. State lives for the lifetime of one :class:`DemoBackend`.

Demo accounts (password ``password123``)::

    admin@example.com     admin
    lead@example.com      tech_lead
    member@example.com    team_member
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

import structlog

from kudos_wall.analytics.errors import AnalyticsDataNotFoundError
from kudos_wall.analytics.models import AnalyticsReport, Period, Recognition, TrendingCategory, TrendingWord
from kudos_wall.auth.errors import InvalidCredentialsError, UserAlreadyExistsError
from kudos_wall.auth.models import LoginRequest, RegisterRequest, Role, Session, UserProfile
from kudos_wall.errors import UserNotFoundError
from kudos_wall.kudos.models import KudoCard
from kudos_wall.kudos.schemas import decode_card
from kudos_wall.users.errors import InvalidRoleTransitionError
from kudos_wall.users.models import ManagedUser

logger = structlog.get_logger()

DEMO_PASSWORD = "password123"


@dataclass
class _Account:
    id: str
    name: str
    email: str
    role: Role
    password: str
    created_at: datetime

    def profile(self) -> UserProfile:
        return UserProfile(id=self.id, email=self.email, name=self.name, role=self.role)

    def managed(self) -> ManagedUser:
        return ManagedUser(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
            updated_at=self.created_at,
        )


def _seed_accounts() -> list[_Account]:
    now = datetime.now(timezone.utc)
    rows = [
        ("1", "Admin User", "admin@example.com", Role.admin),
        ("2", "Tech Lead", "lead@example.com", Role.tech_lead),
        ("3", "Team Member", "member@example.com", Role.team_member),
        ("u1", "John Doe", "john.doe@example.com", Role.team_member),
        ("u2", "Alice Brown", "alice.brown@example.com", Role.team_member),
        ("u3", "Bob Wilson", "bob.wilson@example.com", Role.team_member),
        ("u4", "Emma Johnson", "emma.johnson@example.com", Role.tech_lead),
        ("u5", "Sam Taylor", "sam.taylor@example.com", Role.tech_lead),
    ]
    return [_Account(id, name, email, role, DEMO_PASSWORD, now) for id, name, email, role in rows]


SEED_KUDOS = [
    {
        "id": "1",
        "recipient": "Jane Smith",
        "team": "Engineering",
        "category": "Innovation",
        "message": "Jane implemented a brilliant solution that improved our system performance by 40%. "
        "Her innovative approach saved us weeks of work!",
        "from": {"name": "Michael Johnson", "date": "May 10, 2023"},
    },
    {
        "id": "2",
        "recipient": "David Lee",
        "team": "Design",
        "category": "Collaboration",
        "message": "David went out of his way to help our team meet the deadline. He stayed late and "
        "provided valuable insights that made the project successful.",
        "from": {"name": "Sarah Williams", "date": "May 8, 2023"},
    },
    {
        "id": "3",
        "recipient": {"name": "Alex Chen", "department": "Product"},
        "from": {"name": "Emily Davis"},
        "category": "Mentorship",
        "message": "Alex helped me understand the product requirements and was always available to "
        "answer my questions.",
        "date": "2023-05-05T09:00:00Z",
    },
]


# ---------------------------------------------------------------------------
# Analytics fixtures
# ---------------------------------------------------------------------------


def _report(
    period: Period,
    individuals: list[tuple[str, int]],
    teams: list[tuple[str, int]],
    words: list[tuple[str, int]],
    categories: list[tuple[str, int]],
) -> AnalyticsReport:
    return AnalyticsReport(
        period=period,
        top_individuals=[Recognition(str(i), name, count) for i, (name, count) in enumerate(individuals, 1)],
        top_teams=[Recognition(str(i), name, count) for i, (name, count) in enumerate(teams, 1)],
        trending_words=[TrendingWord(word, freq) for word, freq in words],
        trending_categories=[TrendingCategory(name, count) for name, count in categories],
    )


ANALYTICS_FIXTURES: dict[Period, AnalyticsReport] = {
    Period.weekly: _report(
        Period.weekly,
        [("John Doe", 15), ("Jane Smith", 12), ("Robert Johnson", 10), ("Emily Davis", 8), ("Michael Brown", 7)],
        [("Engineering", 42), ("Design", 28), ("Product", 23), ("Marketing", 18), ("Customer Support", 15)],
        [("innovative", 24), ("teamwork", 21), ("helpful", 19), ("creative", 16), ("dedicated", 14),
         ("supportive", 12), ("reliable", 11)],
        [("Collaboration", 32), ("Technical Excellence", 28), ("Innovation", 24), ("Customer Focus", 18),
         ("Leadership", 12)],
    ),
    Period.monthly: _report(
        Period.monthly,
        [("Jane Smith", 45), ("John Doe", 39), ("Emily Davis", 36), ("Robert Johnson", 32), ("Sarah Miller", 28)],
        [("Engineering", 120), ("Product", 95), ("Design", 88), ("Marketing", 72), ("Sales", 65)],
        [("collaborative", 75), ("innovative", 68), ("supportive", 62), ("dedicated", 57), ("proactive", 52),
         ("thoughtful", 48), ("skilled", 45)],
        [("Collaboration", 110), ("Innovation", 95), ("Technical Excellence", 88), ("Customer Focus", 75),
         ("Leadership", 62)],
    ),
    Period.yearly: _report(
        Period.yearly,
        [("John Doe", 185), ("Jane Smith", 172), ("Michael Brown", 163), ("Emily Davis", 145),
         ("Robert Johnson", 138)],
        [("Engineering", 520), ("Product", 435), ("Design", 380), ("Marketing", 325), ("Sales", 290)],
        [("innovative", 312), ("collaborative", 289), ("dedication", 265), ("supportive", 241),
         ("excellence", 220), ("leadership", 195), ("initiative", 182)],
        [("Innovation", 425), ("Collaboration", 410), ("Technical Excellence", 385), ("Leadership", 310),
         ("Customer Focus", 275)],
    ),
}


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


class DemoDirectory:
    """Accounts shared by the demo auth gateway and user repositories."""

    def __init__(self, accounts: Optional[list[_Account]] = None) -> None:
        self._accounts = {a.id: a for a in (accounts if accounts is not None else _seed_accounts())}

    def by_email(self, email: str) -> Optional[_Account]:
        wanted = email.strip().lower()
        return next((a for a in self._accounts.values() if a.email.lower() == wanted), None)

    def get(self, user_id: str) -> Optional[_Account]:
        return self._accounts.get(user_id)

    def add(self, account: _Account) -> None:
        self._accounts[account.id] = account

    def all(self) -> list[_Account]:
        return list(self._accounts.values())


class DemoAuthGateway:
    def __init__(self, directory: DemoDirectory) -> None:
        self._directory = directory

    async def login(self, request: LoginRequest) -> Session:
        account = self._directory.by_email(request.email)
        if account is None:
            raise UserNotFoundError(request.email)
        if account.password != request.password:
            raise InvalidCredentialsError()
        return Session(token=f"demo-{uuid.uuid4().hex}", user=account.profile())

    async def register(self, request: RegisterRequest) -> Session:
        if self._directory.by_email(request.email) is not None:
            raise UserAlreadyExistsError(request.email)
        account = _Account(
            id=uuid.uuid4().hex[:8],
            name=request.name,
            email=request.email,
            role=Role.team_member,
            password=request.password,
            created_at=datetime.now(timezone.utc),
        )
        self._directory.add(account)
        logger.info("demo_user_registered", user_id=account.id)
        return Session(token=f"demo-{uuid.uuid4().hex}", user=account.profile())


class DemoKudosRepository:
    def __init__(self, seed: Optional[list[dict]] = None) -> None:
        self._cards: list[KudoCard] = [decode_card(raw) for raw in (seed if seed is not None else SEED_KUDOS)]

    async def create(self, card: KudoCard) -> str:
        card_id = uuid.uuid4().hex
        self._cards.insert(0, replace(card, id=card_id))
        return card_id

    async def list_all(self) -> list[KudoCard]:
        return list(self._cards)


class DemoUserRepository:
    """Listing plus the two legal role edges: team_member <-> tech_lead."""

    def __init__(self, directory: DemoDirectory) -> None:
        self._directory = directory

    async def list_users(self, role: Optional[Role] = None) -> list[ManagedUser]:
        return [a.managed() for a in self._directory.all() if role is None or a.role is role]

    async def promote_to_lead(self, user_id: str) -> str:
        return self._change(user_id, Role.team_member, Role.tech_lead)

    async def demote_to_member(self, user_id: str) -> str:
        return self._change(user_id, Role.tech_lead, Role.team_member)

    def _change(self, user_id: str, from_role: Role, to_role: Role) -> str:
        account = self._directory.get(user_id)
        if account is None:
            raise UserNotFoundError(user_id)
        if account.role is not from_role:
            raise InvalidRoleTransitionError(user_id, from_role.api_value, to_role.api_value)
        account.role = to_role
        return account.id


class DemoAnalyticsSource:
    def __init__(self, fixtures: Optional[dict[Period, AnalyticsReport]] = None) -> None:
        self._fixtures = fixtures if fixtures is not None else ANALYTICS_FIXTURES

    async def fetch(self, period: Period) -> AnalyticsReport:
        report = self._fixtures.get(period)
        if report is None:
            raise AnalyticsDataNotFoundError(period.value)
        return report


class DemoBackend:
    """One consistent set of demo adapters."""

    def __init__(self) -> None:
        self.directory = DemoDirectory()
        self.auth = DemoAuthGateway(self.directory)
        self.kudos = DemoKudosRepository()
        self.users = DemoUserRepository(self.directory)
        self.analytics = DemoAnalyticsSource()
