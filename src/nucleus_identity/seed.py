"""Default data seeding for Nucleus.

Creates the default permissions, the admin and member roles and, when an
admin password is configured, the protected system account. Running it
again only adds what is missing.

Usage:
    seed-identity
    # or
    python -m nucleus_identity.seed

Options:
    --dry-run   Show what would be created without writing to database
"""

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nucleus_config import Settings, configure_logging, get_settings
from nucleus_identity.application.services import AccountManager
from nucleus_identity.domain.user import User
from nucleus_identity.infrastructure.persistence.sqlalchemy.models import (
    PermissionModel,
    RoleModel,
    RolePermissionModel,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyIdentityRepositoryFactory,
)
from nucleus_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)

# name -> display name
DEFAULT_PERMISSIONS: dict[str, str] = {
    "users.view": "View users",
    "users.create": "Create users",
    "users.edit": "Edit users",
    "users.delete": "Delete users",
    "roles.view": "View roles",
}

MEMBER_PERMISSIONS = ("users.view",)


@dataclass
class SeedStats:
    """Statistics about what was seeded."""

    permissions_created: int = 0
    roles_created: list[str] = field(default_factory=list)
    admin_created: bool = False


async def ensure_permissions(
    session: AsyncSession,
    definitions: dict[str, str],
) -> tuple[dict[str, PermissionModel], int]:
    """Return all permissions by name, creating the missing ones."""
    result = await session.execute(select(PermissionModel))
    permissions = {model.name: model for model in result.scalars().all()}

    created = 0
    for name, display_name in definitions.items():
        if name in permissions:
            continue
        model = PermissionModel(name=name, display_name=display_name)
        session.add(model)
        permissions[name] = model
        created += 1
        logger.info("Created permission: %s", name)

    await session.flush()
    return permissions, created


async def ensure_role(
    session: AsyncSession,
    name: str,
    permissions: list[PermissionModel],
) -> Optional[RoleModel]:
    """Create the role with the given permissions; None if it already exists."""
    result = await session.execute(select(RoleModel).where(RoleModel.name == name))
    if result.scalar_one_or_none() is not None:
        logger.debug("Role already exists: %s", name)
        return None

    role = RoleModel(name=name)
    role.role_permissions = [
        RolePermissionModel(permission=permission) for permission in permissions
    ]
    session.add(role)
    await session.flush()
    logger.info("Created role: %s (%d permissions)", name, len(permissions))
    return role


async def ensure_admin_account(
    factory: SQLAlchemyIdentityRepositoryFactory,
    settings: Settings,
    password_service: PasswordHashingService,
) -> bool:
    """Create the protected admin account and grant it the admin role.

    Returns True if the account was created.
    """
    if settings.default_admin_password is None:
        logger.info("DEFAULT_ADMIN_PASSWORD not set, skipping admin account")
        return False

    user_repo = factory.user_repository()
    username = settings.default_admin_username
    if await user_repo.find_by_username(username) is not None:
        logger.debug("Admin account already exists")
        return False

    admin_role = await factory.role_catalogue().find_by_name(settings.admin_role_name)
    if admin_role is None:
        logger.error("Admin role %r is missing", settings.admin_role_name)
        return False

    account_manager = AccountManager(
        user_repository=user_repo,
        credential_repository=factory.credential_repository(),
        password_service=password_service,
        require_unique_email=settings.require_unique_email,
    )
    user = User.create(username, settings.default_admin_email)
    result = await account_manager.create_account(
        user,
        settings.default_admin_password.get_secret_value(),
    )
    if not result.succeeded:
        logger.error("Could not create admin account: %s", result)
        return False

    await user_repo.replace_roles(user.id, [admin_role.id])
    logger.info("Created admin account: %s", settings.default_admin_email)
    return True


async def seed_defaults(
    session_maker: async_sessionmaker[AsyncSession],
    settings: Optional[Settings] = None,
    password_service: Optional[PasswordHashingService] = None,
) -> SeedStats:
    """Seed default permissions, roles and the admin account in one transaction."""
    settings = settings or get_settings()
    password_service = password_service or PasswordHashingService.from_settings(
        settings,
    )
    stats = SeedStats()

    async with session_maker() as session:
        factory = SQLAlchemyIdentityRepositoryFactory(
            session,
            member_role_name=settings.member_role_name,
        )
        try:
            permissions, stats.permissions_created = await ensure_permissions(
                session,
                DEFAULT_PERMISSIONS,
            )

            role_definitions = {
                settings.admin_role_name: list(permissions.values()),
                settings.member_role_name: [
                    permissions[name] for name in MEMBER_PERMISSIONS
                ],
            }
            for role_name, role_permissions in role_definitions.items():
                if await ensure_role(session, role_name, role_permissions):
                    stats.roles_created.append(role_name)

            stats.admin_created = await ensure_admin_account(
                factory,
                settings,
                password_service,
            )
            await factory.commit()
        except Exception:
            await factory.rollback()
            logger.exception("Seeding failed, changes rolled back")
            raise

    logger.info(
        "Seeded %d permission(s), roles %s, admin account %s",
        stats.permissions_created,
        stats.roles_created or "unchanged",
        "created" if stats.admin_created else "unchanged",
    )
    return stats


async def _run(dry_run: bool) -> None:
    from nucleus_identity.infrastructure.persistence.sqlalchemy.database import (
        create_tables,
        get_session_maker,
    )

    settings = get_settings()
    if dry_run:
        logger.info("DRY RUN - no changes will be made")
        logger.info("Permissions: %s", ", ".join(DEFAULT_PERMISSIONS))
        logger.info(
            "Roles: %s, %s",
            settings.admin_role_name,
            settings.member_role_name,
        )
        return

    await create_tables()
    await seed_defaults(get_session_maker(), settings)


def main():
    """CLI entry point."""
    dry_run = "--dry-run" in sys.argv or "-n" in sys.argv

    if "--help" in sys.argv or "-h" in sys.argv:
        print(__doc__)
        sys.exit(0)

    settings = get_settings()
    configure_logging(settings)

    db_url = settings.database_url
    db_display = db_url.split("@")[-1] if "@" in db_url else db_url
    logger.info("Nucleus identity seeder")
    logger.info("Database: %s", db_display)

    asyncio.run(_run(dry_run=dry_run))


if __name__ == "__main__":
    main()
