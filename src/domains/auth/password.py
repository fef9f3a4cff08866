# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Password hashing utilities using bcrypt.

Hashing and verification are slow on purpose. The async variants run them
in a worker thread so a login never stalls the event loop.

Example:
    >>> hasher = PasswordHasher()
    >>> hashed = hasher.hash("my_password")
    >>> hasher.verify("my_password", hashed)
    True
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Secure password hashing using bcrypt.

    Attributes:
        _rounds: Number of bcrypt rounds for hashing.
        _dummy_hash: Hash checked when the account does not exist, so that
            unknown emails cost one KDF evaluation like wrong passwords do.

    Example:
        >>> hasher = PasswordHasher()
        >>> hashed = hasher.hash("secure_password")
        >>> hasher.verify("secure_password", hashed)
        True
        >>> hasher.verify("wrong_password", hashed)
        False
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the password hasher.

        Args:
            rounds: Number of bcrypt rounds. Higher is more secure but slower.
                   Default is 12 which takes ~250ms on modern hardware.
        """
        self._rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password to hash.

        Returns:
            Bcrypt hash string with salt embedded.

        Raises:
            ValueError: If password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash in constant time.

        Args:
            password: Plain text password to verify.
            password_hash: Bcrypt hash to verify against.

        Returns:
            True if password matches the hash, False otherwise.
        """
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except ValueError as e:
            logger.warning("Password verification failed: %s", str(e))
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, password_hash)

    async def burn_verification(self, password: str) -> None:
        """Spend one verification on a throwaway hash.

        Used on the unknown-email login path.
        """
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash_async("not-a-real-password")
        await self.verify_async(password or "x", self._dummy_hash)
