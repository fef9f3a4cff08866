# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for the EduGo admin API.

This package contains cross-cutting building blocks:
- config: Application configuration and settings
- errors: Tagged application error taxonomy
"""
