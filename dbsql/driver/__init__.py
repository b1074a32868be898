# SPDX-FileCopyrightText: 2024-present The dbsql-driver Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dbsql-driver
# FILE:           dbsql/driver/__init__.py
# DESCRIPTION:    Connection configuration for remote SQL service driver
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

"""dbsql-driver - Connection configuration for remote SQL service driver


"""
from .hooks import UserConfigHook, ConfigHook, add_hook, hook_manager
from .config import EndpointConfig, DriverConfig, driver_config
from .auth import Authenticator, NoopAuth, PATAuth
from .core import UserConfig, Config, default_config, deep_copy, parse_dsn, build_config, \
     DRIVER_NAME, DRIVER_VERSION, DEFAULT_MAX_ROWS
from .types import Error, InterfaceError, DSNError, DSNFormatError, AuthFormatError, \
     ParamTypeError, TimezoneResolutionError, TProtocolVersion, Location, TLSConfig, \
     get_timezone

#: Current driver version, SEMVER string.
__VERSION__ = DRIVER_VERSION
