"""
Pytest configuration and shared fixtures for Sociocrates tests.

- Async tests run under pytest-asyncio auto mode (configured in pyproject.toml)
- Every test gets its own file-backed SQLite database under tmp_path
- Time is frozen through FrozenTimeUtils so step windows are deterministic
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import pytest

from Sociocrates.dto import ProposalDto
from Sociocrates.features.Circles.logic import CircleLogic
from Sociocrates.features.Circles.qo import AddMemberQo, CreateCircleQo
from Sociocrates.features.Deliberation.logic import ProposalLifecycle
from Sociocrates.features.Proposals.logic import ProposalLogic
from Sociocrates.features.Proposals.qo import CreateProposalQo
from Sociocrates.share.auth import AuthenticatedUser, PasswordHasher
from Sociocrates.share.DatabaseHandler import DatabaseHandler
from Sociocrates.share.enums import ProcessStep, UserRole
from Sociocrates.share.SociocratesApp import SociocratesApp, create_app
from Sociocrates.share.TimeUtils import TimeUtils
from Sociocrates.share.UnitOfWork import UnitOfWork

JWT_SECRET = "test-secret-for-sociocrates"
START_TIME = datetime(2026, 3, 2, 9, 0, 0)


class FrozenTimeUtils(TimeUtils):
    """TimeUtils whose clock only moves when a test moves it."""

    def __init__(self, current: datetime = START_TIME):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: int):
        self.current = self.current + timedelta(seconds=seconds)


@dataclass
class Community:
    """Users and a circle seeded for lifecycle and ledger tests."""

    circle_id: int
    admin: AuthenticatedUser
    alice: AuthenticatedUser
    bob: AuthenticatedUser
    carol: AuthenticatedUser
    olivia: AuthenticatedUser  # global observer, circle member
    oscar: AuthenticatedUser  # participant, observer inside the circle
    nina: AuthenticatedUser  # participant outside the circle


def make_config(**overrides) -> dict:
    config = {
        "cors_origins": ["*"],
        "auto_advance": {"enabled": False, "interval_seconds": 60},
        "question_cap": 3,
        "reaction_max_length": 300,
    }
    config.update(overrides)
    return config


@pytest.fixture
def time_utils() -> FrozenTimeUtils:
    return FrozenTimeUtils()


@pytest.fixture
async def db_handler(tmp_path):
    handler = DatabaseHandler(f"sqlite+aiosqlite:///{tmp_path / 'sociocrates.db'}")
    handler.initialize()
    await handler.init_db()
    yield handler
    await handler.close()


@pytest.fixture
def app(db_handler: DatabaseHandler, time_utils: FrozenTimeUtils) -> SociocratesApp:
    return create_app(make_config(), db_handler, JWT_SECRET, time_utils=time_utils)


async def create_user(
    app: SociocratesApp,
    email: str,
    name: str,
    role: UserRole = UserRole.PARTICIPANT,
    password: str = "correct-horse",
) -> AuthenticatedUser:
    async with UnitOfWork(app.db_handler) as uow:
        user = await uow.user.create_user(
            email=email,
            name=name,
            password_hash=PasswordHasher.hash(password, iterations=1_000),
            role=role.value,
        )
        assert user.id is not None
        user_id = user.id
        await uow.commit()
    return AuthenticatedUser(user_id=user_id, role=role)


@pytest.fixture
async def community(app: SociocratesApp) -> Community:
    admin = await create_user(app, "admin@example.org", "Admin", UserRole.ADMIN)
    alice = await create_user(app, "alice@example.org", "Alice")
    bob = await create_user(app, "bob@example.org", "Bob")
    carol = await create_user(app, "carol@example.org", "Carol")
    olivia = await create_user(app, "olivia@example.org", "Olivia", UserRole.OBSERVER)
    oscar = await create_user(app, "oscar@example.org", "Oscar")
    nina = await create_user(app, "nina@example.org", "Nina")

    circles = CircleLogic(app)
    circle = await circles.create_circle(admin, CreateCircleQo(name="General Circle"))
    for member, role in (
        (alice, UserRole.PARTICIPANT),
        (bob, UserRole.PARTICIPANT),
        (carol, UserRole.PARTICIPANT),
        (olivia, UserRole.OBSERVER),
        (oscar, UserRole.OBSERVER),
    ):
        await circles.add_member(
            admin, circle.id, AddMemberQo(user_id=member.user_id, role=role.value)
        )

    return Community(
        circle_id=circle.id,
        admin=admin,
        alice=alice,
        bob=bob,
        carol=carol,
        olivia=olivia,
        oscar=oscar,
        nina=nina,
    )


async def create_proposal(
    app: SociocratesApp,
    community: Community,
    author: Optional[AuthenticatedUser] = None,
    title: str = "Adopt a shared calendar",
) -> ProposalDto:
    return await ProposalLogic(app).create_proposal(
        author or community.alice,
        CreateProposalQo(
            title=title,
            description="Use one calendar for all circle meetings.",
            circle_id=community.circle_id,
        ),
    )


async def proposal_at_step(
    app: SociocratesApp, community: Community, step: ProcessStep
) -> ProposalDto:
    """Create an active proposal and jump it to the given step."""
    proposal = await create_proposal(app, community)
    lifecycle = ProposalLifecycle(app)
    proposal = await lifecycle.activate(proposal.id)
    if step != ProcessStep.PROPOSAL_PRESENTATION:
        proposal = await lifecycle.set_step(
            proposal.id, community.admin.user_id, community.admin.role, step
        )
    return proposal
