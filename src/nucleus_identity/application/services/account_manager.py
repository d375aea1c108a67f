"""Account and credential store.

Owns account existence and password credentials. Every mutating operation
reports its outcome as an ``IdentityResult``; policy rejections (invalid or
duplicate user names, weak passwords) never raise.
"""

import logging
import re

from nucleus_identity.domain.user import (
    Email,
    InvalidEmailError,
    User,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserRepository,
)
from nucleus_identity.repositories import UserCredentialRepository
from nucleus_identity.results import IdentityError, IdentityErrorCode, IdentityResult
from nucleus_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9\-._@+]+$")
USERNAME_MAX_LENGTH = 256


class AccountManager:
    """Create, update and delete accounts and manage their passwords."""

    def __init__(
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        require_unique_email: bool = True,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._require_unique_email = require_unique_email

    async def create_account(self, user: User, password: str) -> IdentityResult:
        if await self._user_repo.find_by_id(user.id) is not None:
            logger.warning("Rejected account creation: id %s is taken", user.id)
            return IdentityResult.failure(
                IdentityErrorCode.DUPLICATE_USER_ID,
                f"A user with id '{user.id}' already exists.",
            )

        errors = await self._validate_user(user)
        errors.extend(self._validate_password(password))
        if errors:
            logger.warning(
                "Rejected account creation for %s: %s",
                user.username,
                [e.code for e in errors],
            )
            return IdentityResult.failed(*errors)

        password_hash = self._password_service.hash(password)
        user.regenerate_security_stamp()

        try:
            await self._user_repo.add(user)
        except UserAlreadyExistsError:
            return self._store_conflict(user)

        await self._credential_repo.save(user_id=user.id, password_hash=password_hash)
        logger.info("Created account %s (%s)", user.username, user.id)
        return IdentityResult.success()

    async def update_account(self, user: User) -> IdentityResult:
        errors = await self._validate_user(user)
        if errors:
            logger.warning(
                "Rejected update of account %s: %s",
                user.id,
                [e.code for e in errors],
            )
            return IdentityResult.failed(*errors)

        return await self._save(user)

    async def delete_account(self, user: User) -> IdentityResult:
        await self._credential_repo.delete(user.id)
        await self._user_repo.delete(user.id)
        logger.info("Deleted account %s (%s)", user.username, user.id)
        return IdentityResult.success()

    async def remove_credential(self, user: User) -> IdentityResult:
        await self._credential_repo.delete(user.id)
        user.regenerate_security_stamp()
        return await self._save(user)

    async def set_credential(self, user: User, password: str) -> IdentityResult:
        """Give a user without a password a new one."""
        if await self._credential_repo.find_by_user_id(user.id) is not None:
            return IdentityResult.failure(
                IdentityErrorCode.USER_ALREADY_HAS_PASSWORD,
                "User already has a password set.",
            )

        errors = self._validate_password(password)
        if errors:
            return IdentityResult.failed(*errors)

        password_hash = self._password_service.hash(password)
        await self._credential_repo.save(user_id=user.id, password_hash=password_hash)
        user.regenerate_security_stamp()
        return await self._save(user)

    async def verify_password(self, user: User, password: str) -> bool:
        credential = await self._credential_repo.find_by_user_id(user.id)
        if credential is None:
            return False

        if not self._password_service.verify(password, credential.password_hash):
            return False

        if self._password_service.needs_rehash(credential.password_hash):
            await self._credential_repo.save(
                user_id=user.id,
                password_hash=self._password_service.hash(password),
            )
            logger.debug("Rehashed password for user %s", user.id)

        return True

    async def _save(self, user: User) -> IdentityResult:
        try:
            await self._user_repo.save(user)
        except UserAlreadyExistsError:
            return self._store_conflict(user)
        except UserNotFoundError:
            logger.warning("User %s was removed before the update was stored", user.id)
            return IdentityResult.failure(
                IdentityErrorCode.CONCURRENCY_FAILURE,
                "The user was changed or removed by another operation.",
            )
        return IdentityResult.success()

    @staticmethod
    def _store_conflict(user: User) -> IdentityResult:
        logger.warning("Store rejected user %s as a duplicate", user.username)
        return IdentityResult.failure(
            IdentityErrorCode.DUPLICATE_USER_NAME,
            f"User name '{user.username}' conflicts with an existing user.",
        )

    async def _validate_user(self, user: User) -> list[IdentityError]:
        errors: list[IdentityError] = []

        if (
            not user.username
            or len(user.username) > USERNAME_MAX_LENGTH
            or not USERNAME_PATTERN.match(user.username)
        ):
            errors.append(
                IdentityError.of(
                    IdentityErrorCode.INVALID_USER_NAME,
                    f"User name '{user.username}' is invalid.",
                ),
            )
        else:
            owner = await self._user_repo.find_by_username(user.username)
            if owner is not None and owner.id != user.id:
                errors.append(
                    IdentityError.of(
                        IdentityErrorCode.DUPLICATE_USER_NAME,
                        f"User name '{user.username}' is already taken.",
                    ),
                )

        try:
            Email(user.email)
        except InvalidEmailError:
            errors.append(
                IdentityError.of(
                    IdentityErrorCode.INVALID_EMAIL,
                    f"Email '{user.email}' is invalid.",
                ),
            )
        else:
            if self._require_unique_email:
                owner = await self._user_repo.find_by_email(user.email)
                if owner is not None and owner.id != user.id:
                    errors.append(
                        IdentityError.of(
                            IdentityErrorCode.DUPLICATE_EMAIL,
                            f"Email '{user.email}' is already taken.",
                        ),
                    )

        return errors

    def _validate_password(self, password: str) -> list[IdentityError]:
        return [
            IdentityError(code=violation.code.value, description=violation.message)
            for violation in self._password_service.find_violations(password)
        ]
