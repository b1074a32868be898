# SPDX-FileCopyrightText: 2024-present The dbsql-driver Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dbsql-driver
# FILE:           dbsql/driver/auth.py
# DESCRIPTION:    Authenticators
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

"""dbsql-driver - Authenticators

Authenticator is any object with `authenticate()` method that adds credentials to
headers of outbound HTTP request. New authentication methods only have to implement
the `Authenticator` protocol.
"""

from __future__ import annotations
from typing import MutableMapping, Protocol, runtime_checkable
from dataclasses import dataclass, field
from .types import InterfaceError

@runtime_checkable
class Authenticator(Protocol):
    """Authenticator protocol.
    """
    def authenticate(self, headers: MutableMapping[str, str]) -> None:
        """Adds credential material to request headers.
        """

@dataclass(frozen=True)
class NoopAuth:
    """Authenticator that does not add any credentials.
    """
    def authenticate(self, headers: MutableMapping[str, str]) -> None:
        pass

@dataclass(frozen=True)
class PATAuth:
    """Personal access token authenticator.

    Attributes:
        access_token (str): Personal access token
    """
    access_token: str = field(repr=False)
    def authenticate(self, headers: MutableMapping[str, str]) -> None:
        """Sets ``Authorization: Bearer <token>`` header.

        Raises:
            InterfaceError: When token is empty.
        """
        if not self.access_token:
            raise InterfaceError("empty token")
        headers['Authorization'] = f'Bearer {self.access_token}'
