"""Composition root: builds one fully wired client from :class:`Settings`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import httpx
import structlog

from kudos_wall.analytics.source import AnalyticsSource, HttpAnalyticsSource
from kudos_wall.analytics.use_cases import GetAnalytics
from kudos_wall.auth.gateway import AuthGateway, HttpAuthGateway
from kudos_wall.auth.models import Role
from kudos_wall.auth.session import SessionManager
from kudos_wall.auth.store import SessionStore
from kudos_wall.config import Settings
from kudos_wall.demo import DemoBackend
from kudos_wall.http import HttpClient
from kudos_wall.kudos.repository import KudosApiRepository, KudosRepository
from kudos_wall.kudos.use_cases import CreateKudoCard, ListKudoCards
from kudos_wall.navigation import Navigator
from kudos_wall.storage import StorageScope, open_store
from kudos_wall.users.repository import (
    HttpUserRepository,
    HttpUserRoleRepository,
    UserRepository,
    UserRoleRepository,
)
from kudos_wall.users.roster import RoleManagementPanel
from kudos_wall.users.use_cases import DemoteLeadToMember, GetAllUsers, PromoteMemberToLead

logger = structlog.get_logger()


@dataclass
class KudosApp:
    settings: Settings
    navigator: Navigator
    store: SessionStore
    session: SessionManager
    create_kudo: CreateKudoCard
    list_kudos: ListKudoCards
    get_users: GetAllUsers
    promote: PromoteMemberToLead
    demote: DemoteLeadToMember
    get_analytics: GetAnalytics

    @classmethod
    def build(
        cls,
        settings: Settings,
        scope: StorageScope,
        navigator: Navigator,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "KudosApp":
        """Wire storage, HTTP adapters (or the demo backend) and use cases.

        Parameters
        ----------
        scope:
            ``durable`` keeps the session on disk between runs; ``session``
            keeps it in memory for the lifetime of this app.
        transport:
            Forwarded to ``httpx``; tests pass an ``httpx.MockTransport``.
        """
        ttl = timedelta(days=settings.token_ttl_days) if settings.token_ttl_days else None
        store = SessionStore(open_store(scope, settings.home_dir), ttl=ttl)

        auth: AuthGateway
        kudos: KudosRepository
        users: UserRepository
        roles: UserRoleRepository
        analytics: AnalyticsSource

        if settings.demo_mode:
            logger.info("demo_mode_enabled")
            backend = DemoBackend()
            auth, kudos, users, roles, analytics = (
                backend.auth,
                backend.kudos,
                backend.users,
                backend.users,
                backend.analytics,
            )
        else:
            http = HttpClient(settings.api_base_url, token_provider=store.get_token, transport=transport)
            paths = settings.api_paths
            auth = HttpAuthGateway(http, paths)
            kudos = KudosApiRepository(http, paths)
            users = HttpUserRepository(http, paths)
            roles = HttpUserRoleRepository(http, paths)
            analytics = HttpAnalyticsSource(http, paths)

        return cls(
            settings=settings,
            navigator=navigator,
            store=store,
            session=SessionManager(store, auth, navigator),
            create_kudo=CreateKudoCard(kudos),
            list_kudos=ListKudoCards(kudos),
            get_users=GetAllUsers(users),
            promote=PromoteMemberToLead(roles),
            demote=DemoteLeadToMember(roles),
            get_analytics=GetAnalytics(analytics),
        )

    def role_panel(self, role: Role) -> RoleManagementPanel:
        return RoleManagementPanel(role, self.get_users, self.promote, self.demote)
