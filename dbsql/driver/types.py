# SPDX-FileCopyrightText: 2024-present The dbsql-driver Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dbsql-driver
# FILE:           dbsql/driver/types.py
# DESCRIPTION:    Types for dbsql driver
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

"""dbsql-driver - Types for dbsql driver
"""

from __future__ import annotations
import datetime
import ssl
from dataclasses import dataclass, field, replace
from enum import IntEnum
from dateutil import tz
from firebird.base.types import Error

# Exceptions

class InterfaceError(Error):
    """Exception raised for errors that are reported by the driver rather than
    the remote SQL service.
    """

class DSNError(InterfaceError):
    """Base class for errors found in connection string (DSN).
    """

class DSNFormatError(DSNError):
    """Exception raised when DSN is not a valid URL, or when its port is missing
    or malformed.
    """

class AuthFormatError(DSNError):
    """Exception raised for unsupported credentials embedded in DSN (empty token,
    or user name other than ``token``).
    """

class ParamTypeError(DSNError):
    """Exception raised when DSN query parameter has value of wrong type.
    """

class TimezoneResolutionError(InterfaceError):
    """Exception raised when time zone name could not be resolved.

    Important:
        When raised by `.parse_dsn()`, the `config` attribute holds the `.UserConfig`
        built from the rest of the DSN.
    """
    #: Configuration built before time zone lookup failed, or None
    config = None
    #: Time zone name that failed to resolve
    name: str = None

# Enums

class TProtocolVersion(IntEnum):
    """Versions of the SQL service Thrift protocol.
    """
    SPARK_CLI_SERVICE_PROTOCOL_V1 = 0xA501
    SPARK_CLI_SERVICE_PROTOCOL_V2 = 0xA502
    SPARK_CLI_SERVICE_PROTOCOL_V3 = 0xA503
    SPARK_CLI_SERVICE_PROTOCOL_V4 = 0xA504
    SPARK_CLI_SERVICE_PROTOCOL_V5 = 0xA505
    SPARK_CLI_SERVICE_PROTOCOL_V6 = 0xA506
    SPARK_CLI_SERVICE_PROTOCOL_V7 = 0xA507
    SPARK_CLI_SERVICE_PROTOCOL_V8 = 0xA508

# timezone

def get_timezone(timezone: str=None) -> datetime.tzinfo:
    """Returns `datetime.tzinfo` for specified time zone, or None if time zone is unknown.

    Current implementation uses `dateutil.tz` for timezone tzinfo objects. Empty name
    and ``UTC`` return UTC, ``Local`` returns the local time zone of this machine, and
    offsets in ``+HH:MM`` / ``-HH:MM`` format are handled as ``UTC+HH:MM``.
    """
    if not timezone or timezone == 'UTC':
        return tz.UTC
    if timezone == 'Local':
        return tz.tzlocal()
    if timezone[0] in ('+', '-'):
        timezone = 'UTC' + timezone
    return tz.gettz(timezone)

@dataclass(frozen=True)
class Location:
    """Named time zone.

    The `tzinfo` is always derived from `name`, so two locations are equal when their
    names are equal. Use `load()` to create new instances.

    Attributes:
        name (str): Canonical time zone name (for example ``Europe/Prague``)
        tzinfo (datetime.tzinfo): Resolved time zone
    """
    name: str
    tzinfo: datetime.tzinfo = field(default=None, compare=False, repr=False)
    def __str__(self):
        return self.name
    @classmethod
    def load(cls, name: str) -> Location:
        """Returns `Location` for time zone name.

        Only named zones (IANA names, ``UTC`` and ``Local``) are accepted, offsets
        and POSIX TZ strings are not.

        Raises:
            TimezoneResolutionError: When time zone is not known.
        """
        tzinfo = None
        if not name or name[0] not in ('+', '-'):
            tzinfo = get_timezone(name)
        if tzinfo is None or isinstance(tzinfo, tz.tzstr):
            raise TimezoneResolutionError(f"unknown time zone {name}", name=name)
        return cls(name, tzinfo)

# TLS

@dataclass(frozen=True)
class TLSConfig:
    """TLS policy for connections to the SQL service.

    The policy is a plain value; `create_context()` turns it into `ssl.SSLContext`
    for the transport layer.

    Attributes:
        min_version (ssl.TLSVersion): Minimal accepted TLS version
        max_version (ssl.TLSVersion): Maximal accepted TLS version, None = no limit
        verify (bool): Verify server certificate and host name
        ca_file (str): File with CA certificates, None = system defaults
        cert_file (str): Client certificate file
        key_file (str): Client private key file
        server_hostname (str): Host name override for certificate verification
    """
    min_version: ssl.TLSVersion = ssl.TLSVersion.TLSv1_2
    max_version: ssl.TLSVersion = None
    verify: bool = True
    ca_file: str = None
    cert_file: str = None
    key_file: str = None
    server_hostname: str = None
    def clone(self) -> TLSConfig:
        """Returns copy of this TLS policy.
        """
        return replace(self)
    def create_context(self) -> ssl.SSLContext:
        """Returns new `ssl.SSLContext` configured according to this policy.
        """
        context = ssl.create_default_context(cafile=self.ca_file)
        context.minimum_version = self.min_version
        if self.max_version is not None:
            context.maximum_version = self.max_version
        if not self.verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        if self.cert_file:
            context.load_cert_chain(self.cert_file, self.key_file)
        return context
