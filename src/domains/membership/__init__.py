# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Membership domain package.

A membership assigns a user to a school and, optionally, to one of its
academic units with a role tag such as student or teacher.
"""

from src.domains.membership.service import MembershipService

__all__ = ["MembershipService"]
