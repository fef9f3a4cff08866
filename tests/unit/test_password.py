# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for password hashing utilities."""

import pytest

from src.domains.auth.password import PasswordHasher


class TestPasswordHasher:
    """Tests for PasswordHasher class."""

    def test_hash_is_not_plaintext(self, password_hasher: PasswordHasher) -> None:
        hashed = password_hasher.hash("correct horse")

        assert hashed != "correct horse"
        assert hashed.startswith("$2")

    def test_hash_uses_fresh_salt(self, password_hasher: PasswordHasher) -> None:
        assert password_hasher.hash("same-password") != password_hasher.hash("same-password")

    def test_verify_accepts_correct_password(self, password_hasher: PasswordHasher) -> None:
        hashed = password_hasher.hash("correct horse")

        assert password_hasher.verify("correct horse", hashed) is True

    def test_verify_rejects_wrong_password(self, password_hasher: PasswordHasher) -> None:
        hashed = password_hasher.hash("correct horse")

        assert password_hasher.verify("battery staple", hashed) is False

    def test_verify_rejects_empty_inputs(self, password_hasher: PasswordHasher) -> None:
        hashed = password_hasher.hash("correct horse")

        assert password_hasher.verify("", hashed) is False
        assert password_hasher.verify("correct horse", "") is False

    def test_verify_rejects_malformed_hash(self, password_hasher: PasswordHasher) -> None:
        assert password_hasher.verify("correct horse", "not-a-bcrypt-hash") is False

    def test_empty_password_cannot_be_hashed(self, password_hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError):
            password_hasher.hash("")


class TestAsyncVariants:
    @pytest.mark.asyncio
    async def test_hash_and_verify_async(self, password_hasher: PasswordHasher) -> None:
        hashed = await password_hasher.hash_async("s3cret-pass")

        assert await password_hasher.verify_async("s3cret-pass", hashed) is True
        assert await password_hasher.verify_async("other-pass", hashed) is False

    @pytest.mark.asyncio
    async def test_burn_verification_reuses_dummy_hash(self) -> None:
        hasher = PasswordHasher(rounds=4)

        await hasher.burn_verification("anything")
        first = hasher._dummy_hash
        await hasher.burn_verification("")

        assert first is not None
        assert hasher._dummy_hash == first
