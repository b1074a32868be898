# SPDX-FileCopyrightText: 2024-present The dbsql-driver Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dbsql-driver
# FILE:           dbsql/driver/hooks.py
# DESCRIPTION:    Drivers hooks
# CREATED:        12.2.2024
#
# The contents of this file are subject to the MIT License
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Copyright (c) 2024 The dbsql-driver Authors
# All Rights Reserved.
#
# Contributor(s): ______________________________________

"""dbsql-driver - Driver Hooks

This module defines hook points (events) within the configuration lifecycle where
custom functions can be registered and executed. Hooks may inspect or replace
configurations produced by the driver, for example to inject credentials obtained
from a secret store.

Hooks are registered using `dbsql.driver.add_hook()` or the `firebird.base.hooks.hook_manager`.
The signature required for each hook function is documented within the driver functions
that trigger these hooks (`dbsql.driver.core.parse_dsn` and `dbsql.driver.core.build_config`).
"""

from __future__ import annotations

from enum import Enum, auto

from firebird.base.hooks import add_hook, get_callbacks, hook_manager, register_class


class UserConfigHook(Enum):
    """Hooks related to user configuration.
    """
    #: Called after DSN was successfully parsed into user configuration.
    PARSED = auto()

class ConfigHook(Enum):
    """Hooks related to full driver configuration.
    """
    #: Called after configuration was built and before it's returned to caller.
    BUILT = auto()
