# SPDX-FileCopyrightText: 2024-present The dbsql-driver Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dbsql-driver
# FILE:           dbsql/driver/config.py
# DESCRIPTION:    Driver configuration
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

"""dbsql-driver - Driver configuration

Named endpoints and process-level settings can be stored in configuration files
(`configparser` format), so applications may pass endpoint name instead of DSN to
`.build_config()`.

Example::

    [dbsql.driver]
    endpoints = warehouse
    client_timeout = 300

    [warehouse]
    host = example.cloud.databricks.com
    http_path = /sql/1.0/warehouses/abc
    catalog = main
    session_params =
        ansi_mode = true
        statement_timeout = 60
"""

from __future__ import annotations
from typing import Dict, Union, Iterable
import os
from configparser import ConfigParser, ExtendedInterpolation
from firebird.base.config import Config, StrOption, IntOption, BoolOption, \
     ConfigListOption, ListOption

class EndpointConfig(Config): # pylint: disable=R0902
    """SQL service endpoint configuration.
    """
    def __init__(self, name: str, *, optional: bool=False, description: str=None):
        super().__init__(name, optional=optional, description=description)
        #: Connection string, takes precedence over protocol, host, port and http_path
        self.dsn: StrOption = \
            StrOption('dsn', "Connection string")
        #: Protocol, 'http' or 'https'
        self.protocol: StrOption = \
            StrOption('protocol', "Protocol ('http' or 'https')")
        #: Server host name
        self.host: StrOption = \
            StrOption('host', "Server host name")
        #: Server port
        self.port: IntOption = \
            IntOption('port', "Server port")
        #: HTTP path of the SQL warehouse or cluster
        self.http_path: StrOption = \
            StrOption('http_path', "HTTP path of the SQL warehouse or cluster")
        #: Personal access token, default is envar DBSQL_ACCESS_TOKEN or None if not specified
        self.access_token: StrOption = \
            StrOption('access_token', "Personal access token",
                      default=os.environ.get('DBSQL_ACCESS_TOKEN', None))
        #: Initial catalog
        self.catalog: StrOption = \
            StrOption('catalog', "Initial catalog")
        #: Initial schema
        self.schema: StrOption = \
            StrOption('schema', "Initial schema")
        #: Max. number of rows fetched in single page
        self.max_rows: IntOption = \
            IntOption('max_rows', "Max. number of rows fetched in single page")
        #: Query timeout in seconds passed to server
        self.timeout: IntOption = \
            IntOption('timeout', "Query timeout in seconds")
        #: Suffix appended to User-Agent header
        self.user_agent_entry: StrOption = \
            StrOption('user_agent_entry', "Suffix appended to User-Agent header")
        #: Session time zone
        self.timezone: StrOption = \
            StrOption('timezone', "Session time zone")
        #: Session parameters in 'key=value' format
        self.session_params: ListOption = \
            ListOption('session_params', str, "Session parameters in 'key=value' format")
        #: Max. number of request retries
        self.retry_max: IntOption = \
            IntOption('retry_max', "Max. number of request retries")
        #: Min. wait time between retries in seconds
        self.retry_wait_min: IntOption = \
            IntOption('retry_wait_min', "Min. wait time between retries in seconds")
        #: Max. wait time between retries in seconds
        self.retry_wait_max: IntOption = \
            IntOption('retry_wait_max', "Max. wait time between retries in seconds")
    def get_session_params(self) -> Dict[str, str]:
        """Returns `session_params` option value as dictionary.

        Raises:
            ValueError: When item is not in 'key=value' format.
        """
        result = {}
        for item in self.session_params.value or []:
            if not item.strip():
                continue
            key, sep, value = item.partition('=')
            if not sep or not key.strip():
                raise ValueError(f"Session parameter '{item}' is not in 'key=value' format")
            result[key.strip()] = value.strip()
        return result

class DriverConfig(Config):
    """dbsql driver configuration.
    """
    def __init__(self, name: str):
        super().__init__(name)
        #: Run queries asynchronously
        self.run_async: BoolOption = \
            BoolOption('run_async', "Run queries asynchronously")
        #: Interval between query status polls in seconds
        self.poll_interval: IntOption = \
            IntOption('poll_interval', "Interval between query status polls in seconds")
        #: Max. duration of single HTTP request in seconds
        self.client_timeout: IntOption = \
            IntOption('client_timeout', "Max. duration of single HTTP request in seconds")
        #: Max. duration of ping in seconds
        self.ping_timeout: IntOption = \
            IntOption('ping_timeout', "Max. duration of ping in seconds")
        #: Server supports multiple catalogs
        self.can_use_multiple_catalogs: BoolOption = \
            BoolOption('can_use_multiple_catalogs', "Server supports multiple catalogs")
        #: Log Thrift protocol messages
        self.thrift_debug_client_protocol: BoolOption = \
            BoolOption('thrift_debug_client_protocol', "Log Thrift protocol messages")
        #: Default endpoint configuration ('dbsql.endpoint.defaults')
        self.endpoint_defaults: EndpointConfig = \
            EndpointConfig('dbsql.endpoint.defaults', optional=True,
                           description="Default endpoint configuration.")
        #: Registered endpoints
        self.endpoints: ConfigListOption = \
            ConfigListOption('endpoints', "Registered endpoints", EndpointConfig)
    def read(self, filenames: Union[str, Iterable], encoding: str=None):
        """Read configuration from a filename or an iterable of filenames.

        Files that cannot be opened are silently ignored; this is
        designed so that you can specify an iterable of potential
        configuration file locations (e.g. current directory, user's
        home directory, systemwide directory), and all existing
        configuration files in the iterable will be read.  A single
        filename may also be given.

        Return list of successfully read files.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        read_ok = parser.read(filenames, encoding)
        if read_ok:
            self.load_config(parser)
        return read_ok
    def read_file(self, f):
        """Read configuration from a file-like object.

        The `f` argument must be iterable, returning one line at a time.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        parser.read_file(f)
        self.load_config(parser)
    def read_string(self, string: str) -> None:
        """Read configuration from a given string.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        parser.read_string(string)
        self.load_config(parser)
    def read_dict(self, dictionary: Dict) -> None:
        """Read configuration from a dictionary.

        Keys are section names, values are dictionaries with keys and values
        that should be present in the section.
        """
        parser = ConfigParser(interpolation=ExtendedInterpolation())
        parser.read_dict(dictionary)
        self.load_config(parser)
    def get_endpoint(self, name: str) -> EndpointConfig:
        """Returns endpoint configuration, or None if endpoint is not registered.
        """
        for endpoint in self.endpoints.value:
            if endpoint.name == name:
                return endpoint
        return None
    def register_endpoint(self, name: str, config: str=None) -> EndpointConfig:
        """Register endpoint.

        Arguments:
            name: Endpoint name.
            config: Optional endpoint configuration string in ConfigParser format in [name] section.

        Returns:
           EndpointConfig: For newly registered endpoint

        Raises:
            ValueError: If endpoint is already registered.
        """
        if self.get_endpoint(name) is not None:
            raise ValueError(f"Endpoint '{name}' already registered.")
        ep_config = EndpointConfig(name)
        self.endpoints.value.append(ep_config)
        if config:
            parser = ConfigParser(interpolation=ExtendedInterpolation())
            parser.read_string(config)
            ep_config.load_config(parser, name)
        return ep_config

# Configuration

driver_config: DriverConfig = DriverConfig('dbsql.driver')
