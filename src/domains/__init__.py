# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the EduGo admin API.

Each domain module provides a service that validates input, enforces the
domain's invariants and talks to the repositories it needs.

Domains:
    auth: Login, token issuance and verification, active context.
    academic_unit: Per-school unit forest, tree and path reconstruction.
    school: Tenant (school) management.
    user: User accounts.
    subject: Subjects taught in a school.
    membership: User assignments to units.
    guardian: Guardian to student relations.
    material: Learning material removal.
    stats: Global counters.
    iam: Roles, permissions, resources and user role grants.
    menu: Permission-filtered navigation menu.
"""
