"""Access gate for public share links.

Every anonymous operation on a share token goes through
``ShareAccessEvaluator``. Checks run in a fixed order and the first failure
wins:

1. the token must resolve to a file (NOT_FOUND)
2. the share must not be past its expiry (EXPIRED)
3. the download count must be below the ceiling (DOWNLOAD_LIMIT_REACHED)
4. for operations that hand out content, the password must match
   (BAD_PASSWORD)

Metadata views skip step 4 and report ``has_password`` instead. They do
apply step 3, so an exhausted link reports exhaustion on every path.
"""

import asyncio
import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import (
    AppError,
    BadPasswordError,
    DownloadLimitReachedError,
    NotFoundError,
    ShareExpiredError,
)
from app.core.security.passwords import verify_password
from app.models.database import File


class DenyReason(str, enum.Enum):
    """Why a share access was refused."""

    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    DOWNLOAD_LIMIT_REACHED = "download_limit_reached"
    BAD_PASSWORD = "bad_password"


_ERRORS: dict[DenyReason, type[AppError]] = {
    DenyReason.NOT_FOUND: NotFoundError,
    DenyReason.EXPIRED: ShareExpiredError,
    DenyReason.DOWNLOAD_LIMIT_REACHED: DownloadLimitReachedError,
    DenyReason.BAD_PASSWORD: BadPasswordError,
}

_MESSAGES = {
    DenyReason.NOT_FOUND: "Share link not found",
}


@dataclass(frozen=True)
class ShareAccessDecision:
    """Outcome of evaluating a token and optional password."""

    allowed: bool
    reason: DenyReason | None = None
    file: File | None = None

    @classmethod
    def allow(cls, file: File) -> "ShareAccessDecision":
        return cls(allowed=True, file=file)

    @classmethod
    def deny(cls, reason: DenyReason, file: File | None = None) -> "ShareAccessDecision":
        return cls(allowed=False, reason=reason, file=file)

    def raise_for_denial(self) -> File:
        """Return the file when allowed, otherwise raise the matching error."""
        if self.allowed and self.file is not None:
            return self.file
        reason = self.reason or DenyReason.NOT_FOUND
        raise _ERRORS[reason](_MESSAGES.get(reason))


class ShareAccessEvaluator:
    """Resolves share tokens and decides ALLOW or DENY."""

    def __init__(self, db: AsyncSession, clock: Callable[[], datetime] = datetime.utcnow):
        self.db = db
        self.clock = clock

    async def resolve(self, token: str | None) -> File | None:
        """Find the file currently shared under ``token``."""
        if not token:
            return None

        query = (
            select(File)
            .options(selectinload(File.owner))
            .where(File.share_token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    def evaluate(self, file: File | None, now: datetime | None = None) -> ShareAccessDecision:
        """Apply every check except the password to an already resolved file."""
        if file is None or file.share_token is None:
            return ShareAccessDecision.deny(DenyReason.NOT_FOUND)

        now = now or self.clock()
        if file.share_expires_at is not None and file.share_expires_at < now:
            return ShareAccessDecision.deny(DenyReason.EXPIRED, file)

        if (
            file.share_max_downloads is not None
            and file.share_download_count >= file.share_max_downloads
        ):
            return ShareAccessDecision.deny(DenyReason.DOWNLOAD_LIMIT_REACHED, file)

        return ShareAccessDecision.allow(file)

    async def check_password(
        self, decision: ShareAccessDecision, password: str | None
    ) -> ShareAccessDecision:
        """
        Apply the password check to an allowed decision.

        scrypt runs in a worker thread so wrong guesses never stall the event loop.
        """
        file = decision.file
        if not decision.allowed or file is None or file.share_password_hash is None:
            return decision

        if not await asyncio.to_thread(verify_password, password, file.share_password_hash):
            return ShareAccessDecision.deny(DenyReason.BAD_PASSWORD, file)
        return decision

    async def check(
        self,
        token: str | None,
        password: str | None = None,
        require_password: bool = False,
    ) -> ShareAccessDecision:
        """Resolve ``token`` and evaluate it."""
        file = await self.resolve(token)
        decision = self.evaluate(file)
        if require_password:
            decision = await self.check_password(decision, password)
        return decision
