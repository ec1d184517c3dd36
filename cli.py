"""CLI commands for event invitations management."""

import asyncio
from datetime import UTC, datetime

import typer
from sqlalchemy import select

from src.auth.dtos import RoleSlug, UserStatus
from src.auth.security import hash_password
from src.config.database import async_session_manager
from src.events.repository.orm_models import Event
from src.invitation_templates.repository.orm_models import TemplateCategory
from src.models.user import User, UserRole

app = typer.Typer(help="CLI commands for event invitations management")

ROLES = [
    {
        "slug": RoleSlug.SUPER_ADMIN.value,
        "name": "Super Admin",
        "description": "Full access, including template categories",
        "is_protected": True,
    },
    {
        "slug": RoleSlug.APPLICATION_ADMIN.value,
        "name": "Application Admin",
        "description": "Manages templates and every event",
        "is_protected": True,
    },
    {
        "slug": RoleSlug.HOST.value,
        "name": "Host",
        "description": "Creates events and invites guests",
    },
    {
        "slug": RoleSlug.ATTENDEE.value,
        "name": "Attendee",
        "description": "Receives invitations and answers RSVPs",
        "is_default": True,
    },
]

CATEGORIES = [
    ("Baby & Kids", "baby-kids", "Baby showers, kids birthdays, and children events", "#FFB6C1"),
    ("Parties", "parties", "General party invitations", "#FF6347"),
    ("Birthday", "birthday", "Birthday party invitations", "#FF69B4"),
    ("Wedding", "wedding", "Wedding invitations", "#F0E68C"),
    ("Business", "business", "Business event invitations", "#4682B4"),
    ("Holidays", "holidays", "Holiday celebration invitations", "#32CD32"),
    ("Sports", "sports", "Sports event invitations", "#90EE90"),
    ("Graduation", "graduation", "Graduation celebration invitations", "#9370DB"),
]


@app.command()
def seed_roles():
    """Create the four built-in roles. Existing roles are left untouched."""

    async def _seed_roles():
        created = []
        async with async_session_manager() as session:
            existing = set((await session.execute(select(UserRole.slug))).scalars().all())
            for role in ROLES:
                if role["slug"] in existing:
                    continue
                session.add(UserRole(**role))
                created.append(role["slug"])
        return created

    created = asyncio.run(_seed_roles())
    if not created:
        typer.secho("All roles already exist", fg=typer.colors.YELLOW)
        return
    typer.secho(f"Created roles: {', '.join(created)}", fg=typer.colors.GREEN)


@app.command()
def seed_categories():
    """Create the default template categories, skipping slugs already present."""

    async def _seed_categories():
        created = 0
        async with async_session_manager() as session:
            existing = set((await session.execute(select(TemplateCategory.slug))).scalars().all())
            for sort_order, (name, slug, description, color) in enumerate(CATEGORIES, start=1):
                if slug in existing:
                    continue
                session.add(
                    TemplateCategory(
                        name=name,
                        slug=slug,
                        description=description,
                        color=color,
                        sort_order=sort_order,
                    )
                )
                created += 1
        return created

    created = asyncio.run(_seed_categories())
    typer.secho(f"Created {created} categories", fg=typer.colors.GREEN)


@app.command()
def create_user(
    email: str = typer.Argument(..., help="Email address of the account"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
    name: str = typer.Option(None, "--name", "-n", help="Display name"),
    role: RoleSlug = typer.Option(RoleSlug.HOST, "--role", "-r", help="Role slug"),
    active: bool = typer.Option(True, "--active/--inactive", help="Skip email verification"),
):
    """Create an account with the given role."""

    async def _create_user():
        async with async_session_manager() as session:
            existing = (
                await session.execute(select(User).where(User.email == email))
            ).scalar_one_or_none()
            if existing:
                raise ValueError(f"User already exists: {email}")

            user_role = (
                await session.execute(select(UserRole).where(UserRole.slug == role.value))
            ).scalar_one_or_none()
            if not user_role:
                raise ValueError(f"Role not found: {role.value}. Run seed-roles first.")

            user = User(
                email=email,
                name=name,
                hashed_password=hash_password(password),
                status=UserStatus.ACTIVE if active else UserStatus.INACTIVE,
                role_id=user_role.uuid,
                email_verified_at=datetime.now(UTC) if active else None,
            )
            session.add(user)
            await session.flush()
            return user

    try:
        user = asyncio.run(_create_user())
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("User created!", fg=typer.colors.GREEN)
    typer.secho(f"  ID: {user.uuid}", fg=typer.colors.CYAN)
    typer.secho(f"  Email: {user.email}", fg=typer.colors.BLUE)
    typer.secho(f"  Role: {role.value}", fg=typer.colors.MAGENTA)
    typer.secho(f"  Status: {user.status.value}", fg=typer.colors.BLUE)


@app.command()
def list_events(
    include_trashed: bool = typer.Option(False, "--include-trashed", help="Show deleted events too"),
):
    """List events with their owner and status."""

    async def _list_events():
        async with async_session_manager() as session:
            stmt = (
                select(Event, User.email)
                .join(User, User.uuid == Event.created_by_user_id)
                .order_by(Event.start_date_time)
            )
            if not include_trashed:
                stmt = stmt.where(Event.is_trashed.is_(False))
            return (await session.execute(stmt)).all()

    rows = asyncio.run(_list_events())
    if not rows:
        typer.secho("No events found", fg=typer.colors.YELLOW)
        return

    for event, owner_email in rows:
        trashed = " (deleted)" if event.is_trashed else ""
        typer.secho(f"{event.title}{trashed}", fg=typer.colors.GREEN)
        typer.secho(f"  ID: {event.uuid}", fg=typer.colors.CYAN)
        typer.secho(f"  Starts: {event.start_date_time.isoformat()}", fg=typer.colors.BLUE)
        typer.secho(f"  Status: {event.status.value}", fg=typer.colors.MAGENTA)
        typer.secho(f"  Owner: {owner_email}", fg=typer.colors.BLUE)


if __name__ == "__main__":
    app()
