"""EduGo Admin API.

Administration backend for a multi-tenant education platform: schools,
academic unit hierarchies, users, memberships and the role/permission
catalog behind a token-authenticated JSON API.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
