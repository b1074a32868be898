# SPDX-FileCopyrightText: 2024-present The dbsql-driver Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dbsql-driver
# FILE:           dbsql/driver/core.py
# DESCRIPTION:    Main driver code (connection configuration)
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

"""dbsql-driver - Main driver code (connection configuration)

Configurations are immutable snapshots. Use `~UserConfig.with_overrides()` or
`~Config.with_overrides()` to get modified copy, and `deep_copy()` to get copy that
does not share any mutable state with the original.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Union
import re
import datetime
from dataclasses import dataclass, field, replace
from urllib.parse import urlsplit, parse_qsl, unquote
from firebird.base.types import DEFAULT
from firebird.base.logging import LoggingIdMixin, get_logger
from .types import InterfaceError, DSNFormatError, AuthFormatError, ParamTypeError, \
     TimezoneResolutionError, TProtocolVersion, Location, TLSConfig
from .auth import Authenticator, NoopAuth, PATAuth
from .hooks import UserConfigHook, ConfigHook, register_class, get_callbacks, add_hook
from .config import driver_config, EndpointConfig

#: Driver name reported to server
DRIVER_NAME: str = 'dbsql-python-driver'
#: Driver version, SEMVER string
DRIVER_VERSION: str = '1.0.0'

#: Default number of rows fetched in single page
DEFAULT_MAX_ROWS: int = 100000
#: Default port
DEFAULT_PORT: int = 443
#: Default protocol
DEFAULT_PROTOCOL: str = 'https'
#: Default max. number of request retries
DEFAULT_RETRY_MAX: int = 4
#: Default min. wait time between retries
DEFAULT_RETRY_WAIT_MIN: datetime.timedelta = datetime.timedelta(seconds=1)
#: Default max. wait time between retries
DEFAULT_RETRY_WAIT_MAX: datetime.timedelta = datetime.timedelta(seconds=30)

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')

@dataclass(frozen=True)
class UserConfig(LoggingIdMixin):
    """Connection configuration exposed to users.

    Fields left at None (or zero) are considered unset, `with_defaults()` fills them.

    Attributes:
        protocol (str): 'http' or 'https'
        host (str): Server host name
        port (int): Server port
        http_path (str): HTTP path of the SQL warehouse or cluster
        catalog (str): Initial catalog
        schema (str): Initial schema
        authenticator (Authenticator): Supplies credentials for requests
        access_token (str): Personal access token (not included in `repr`)
        max_rows (int): Max. number of rows fetched in single page
        query_timeout (datetime.timedelta): Timeout passed to server for query processing
        user_agent_entry (str): Suffix appended to User-Agent header
        location (Location): Session time zone
        session_params (dict): Session parameters passed to server
        retry_wait_min (datetime.timedelta): Min. wait time between retries
        retry_wait_max (datetime.timedelta): Max. wait time between retries
        retry_max (int): Max. number of request retries
    """
    protocol: str = None
    host: str = None
    port: int = None
    http_path: str = None
    catalog: str = None
    schema: str = None
    authenticator: Authenticator = None
    access_token: str = field(default=None, repr=False)
    max_rows: int = None
    query_timeout: datetime.timedelta = None
    user_agent_entry: str = None
    location: Location = None
    session_params: Dict[str, str] = None
    retry_wait_min: datetime.timedelta = None
    retry_wait_max: datetime.timedelta = None
    retry_max: int = None
    def with_defaults(self) -> UserConfig:
        """Returns copy with default values assigned to unset fields.

        Applying defaults to configuration that already has them is a no-op.
        """
        changes: Dict[str, Any] = {}
        if self.max_rows is None or self.max_rows <= 0:
            changes['max_rows'] = DEFAULT_MAX_ROWS
        if not self.protocol:
            changes['protocol'] = DEFAULT_PROTOCOL
            changes['port'] = DEFAULT_PORT
        if not self.port:
            changes['port'] = DEFAULT_PORT
        if self.authenticator is None:
            changes['authenticator'] = NoopAuth()
        if self.session_params is None:
            changes['session_params'] = {}
        if not self.retry_max or self.retry_max < 0:
            changes['retry_max'] = DEFAULT_RETRY_MAX
        wait_min = self.retry_wait_min or DEFAULT_RETRY_WAIT_MIN
        wait_max = self.retry_wait_max or DEFAULT_RETRY_WAIT_MAX
        if wait_min > wait_max:
            wait_max = wait_min
        if wait_min != self.retry_wait_min:
            changes['retry_wait_min'] = wait_min
        if wait_max != self.retry_wait_max:
            changes['retry_wait_max'] = wait_max
        return self.with_overrides(**changes)
    def with_overrides(self, **changes) -> UserConfig:
        """Returns copy with specified fields replaced.

        The `session_params` dictionary of the result is never shared with this instance.
        """
        if 'session_params' not in changes and self.session_params is not None:
            changes['session_params'] = dict(self.session_params)
        return replace(self, **changes)
    def deep_copy(self, *, strict: bool=False) -> UserConfig:
        """Returns copy that does not share mutable state with this instance.

        The `location` is loaded again from its name. When it could not be loaded,
        the copy has no location and a warning is logged. The `tzinfo` of the new
        location may be the same (immutable) instance, as `dateutil` caches them.

        Arguments:
            strict: Raise `.TimezoneResolutionError` instead of dropping the location.
        """
        session_params = None
        if self.session_params is not None:
            session_params = dict(self.session_params)
        location = None
        if self.location is not None:
            try:
                location = Location.load(self.location.name)
            except TimezoneResolutionError:
                if strict:
                    raise
                get_logger(self).warning(f"Could not copy location '{self.location.name}'")
        return replace(self, location=location, session_params=session_params)
    def session_configuration(self) -> Dict[str, str]:
        """Returns session parameters sent to server at session start.

        Includes ``timezone`` taken from `location` unless session parameters already
        specify it.
        """
        result = dict(self.session_params or {})
        if self.location is not None:
            if not any(key.lower() == 'timezone' for key in result):
                result['timezone'] = self.location.name
        return result

@dataclass(frozen=True)
class Config(LoggingIdMixin):
    """Full driver configuration.

    Attributes:
        user_config (UserConfig): Configuration exposed to users
        tls_config (TLSConfig): TLS policy, None disables TLS
        run_async (bool): Run queries asynchronously
        poll_interval (datetime.timedelta): Interval between query status polls
        client_timeout (datetime.timedelta): Max. duration of single HTTP request
        ping_timeout (datetime.timedelta): Max. duration of ping
        can_use_multiple_catalogs (bool): Server supports multiple catalogs
        driver_name (str): Driver name reported to server
        driver_version (str): Driver version reported to server
        thrift_protocol (str): Thrift protocol
        thrift_transport (str): Thrift transport
        thrift_protocol_version (TProtocolVersion): Thrift protocol version
        thrift_debug_client_protocol (bool): Log Thrift protocol messages
    """
    user_config: UserConfig = field(default_factory=UserConfig)
    tls_config: TLSConfig = None
    run_async: bool = False
    poll_interval: datetime.timedelta = None
    client_timeout: datetime.timedelta = None
    ping_timeout: datetime.timedelta = None
    can_use_multiple_catalogs: bool = False
    driver_name: str = None
    driver_version: str = None
    thrift_protocol: str = None
    thrift_transport: str = None
    thrift_protocol_version: TProtocolVersion = None
    thrift_debug_client_protocol: bool = False
    @property
    def user_agent(self) -> str:
        """User-Agent header value.
        """
        result = f'{self.driver_name}/{self.driver_version}'
        if self.user_config.user_agent_entry:
            result += f' ({self.user_config.user_agent_entry})'
        return result
    def endpoint_url(self) -> str:
        """Returns URL of the endpoint the Thrift client connects to.

        Credentials are never part of the URL. IPv6 host is enclosed in brackets.
        """
        ucfg = self.user_config
        host = ucfg.host
        if host and ':' in host:
            host = f'[{host}]'
        return f'{ucfg.protocol}://{host}:{ucfg.port}{ucfg.http_path or ""}'
    def with_overrides(self, **changes) -> Config:
        """Returns copy with specified fields replaced.

        Keyword arguments that are not `Config` fields are applied to `user_config`.
        """
        user_changes = {key: changes.pop(key) for key in list(changes)
                        if key not in Config.__dataclass_fields__}
        if 'user_config' not in changes:
            changes['user_config'] = self.user_config.with_overrides(**user_changes)
        elif user_changes:
            changes['user_config'] = changes['user_config'].with_overrides(**user_changes)
        return replace(self, **changes)
    def deep_copy(self, *, strict: bool=False) -> Config:
        """Returns copy that does not share mutable state with this instance.

        Arguments:
            strict: Raise `.TimezoneResolutionError` when time zone could not be copied.
        """
        return replace(self, user_config=self.user_config.deep_copy(strict=strict),
                       tls_config=None if self.tls_config is None else self.tls_config.clone())

def default_config() -> Config:
    """Returns driver configuration with default values.
    """
    return Config(user_config=UserConfig().with_defaults(),
                  tls_config=TLSConfig(),
                  run_async=True,
                  poll_interval=datetime.timedelta(seconds=1),
                  client_timeout=datetime.timedelta(seconds=900),
                  ping_timeout=datetime.timedelta(seconds=60),
                  can_use_multiple_catalogs=True,
                  driver_name=DRIVER_NAME,
                  driver_version=DRIVER_VERSION,
                  thrift_protocol='binary',
                  thrift_transport='http',
                  thrift_protocol_version=TProtocolVersion.SPARK_CLI_SERVICE_PROTOCOL_V6,
                  thrift_debug_client_protocol=False)

def deep_copy(config: Union[Config, UserConfig, None], *,
              strict: bool=False) -> Union[Config, UserConfig, None]:
    """Returns deep copy of configuration, or None if `config` is None.

    Arguments:
        config: Configuration to copy.
        strict: Raise `.TimezoneResolutionError` when time zone could not be copied.
    """
    if config is None:
        return None
    return config.deep_copy(strict=strict)

def _to_int(value: str, param: str) -> int:
    if not _INT_PATTERN.fullmatch(value):
        raise ParamTypeError(f"invalid DSN: {param} param is not an integer", param=param)
    return int(value)

def parse_dsn(dsn: str) -> UserConfig:
    """Constructs `UserConfig` from connection string.

    DSN format::

        [http|https://][token:<access_token>@]<host>:<port>[/<http_path>][?<query>]

    Query parameters `maxRows`, `timeout` (seconds), `catalog`, `schema`,
    `userAgentEntry` and `timezone` (case-insensitive) set the corresponding fields,
    all other query parameters are passed as session parameters.

    Arguments:
        dsn: Connection string.

    Raises:
        DSNFormatError: When DSN is not valid URL, or port is missing or malformed.
        AuthFormatError: When token is empty, or user name other than 'token' is used.
        ParamTypeError: When `maxRows` or `timeout` is not an integer.
        TimezoneResolutionError: When time zone is unknown. The `config` attribute holds
            configuration built from the rest of the DSN.

    Hooks:
        Event `.UserConfigHook.PARSED`: Executed after DSN is parsed. Hook must have
        signature::

            hook_func(dsn: str, config: UserConfig) -> Optional[UserConfig]

        Hook may return `UserConfig` instance or None. First instance returned by
        any hook will become the return value of this function and other hooks
        are not called.
    """
    full_dsn = dsn
    if not dsn.startswith(('https://', 'http://')):
        full_dsn = 'https://' + dsn
    try:
        url = urlsplit(full_dsn)
        hostname = url.hostname
    except ValueError as e:
        raise DSNFormatError("invalid DSN: invalid format") from e
    try:
        port = url.port
    except ValueError as e:
        raise DSNFormatError("invalid DSN: invalid DSN port") from e
    if port is None or not 0 < port <= 65535:
        raise DSNFormatError("invalid DSN: invalid DSN port")
    changes: Dict[str, Any] = {'protocol': url.scheme,
                               'host': hostname or '',
                               'port': port}
    name = unquote(url.username or '')
    if name == 'token':
        token = unquote(url.password or '')
        if not token:
            raise AuthFormatError("invalid DSN: empty token")
        changes['access_token'] = token
        changes['authenticator'] = PATAuth(token)
    elif name:
        raise AuthFormatError("invalid DSN: basic auth not enabled")
    changes['http_path'] = unquote(url.path)
    params: Dict[str, str] = {}
    for key, value in parse_qsl(url.query, keep_blank_values=True):
        params.setdefault(key, value)
    value = params.pop('maxRows', '')
    if value:
        max_rows = _to_int(value, 'maxRows')
        # a page must hold at least one row
        if max_rows > 0:
            changes['max_rows'] = max_rows
    value = params.pop('timeout', '')
    if value:
        changes['query_timeout'] = datetime.timedelta(seconds=_to_int(value, 'timeout'))
    for param, fld in (('catalog', 'catalog'), ('userAgentEntry', 'user_agent_entry'),
                       ('schema', 'schema')):
        if param in params:
            changes[fld] = params.pop(param)
    # first match in query order wins, all matches are consumed
    tz_error: Optional[TimezoneResolutionError] = None
    tz_values = [params.pop(key) for key in list(params) if key.lower() == 'timezone']
    if tz_values:
        try:
            changes['location'] = Location.load(tz_values[0])
        except TimezoneResolutionError as e:
            tz_error = e
    if params:
        changes['session_params'] = params
    ucfg = UserConfig().with_defaults().with_overrides(**changes)
    if tz_error is not None:
        raise TimezoneResolutionError(f"invalid DSN: {tz_error}", name=tz_error.name,
                                      config=ucfg) from tz_error
    for hook in get_callbacks(UserConfigHook.PARSED, UserConfig):
        try:
            result = hook(dsn, ucfg)
        except Exception as e:
            raise InterfaceError("Error in USER_CONFIG_PARSED hook.", *e.args) from e
        if result is not None:
            ucfg = result
            break
    return ucfg

def _seconds(value: Optional[int]) -> Optional[datetime.timedelta]:
    return None if value is None else datetime.timedelta(seconds=value)

def _from_endpoint(ep_config: EndpointConfig) -> UserConfig:
    if not ep_config.host.value:
        raise InterfaceError(f"Endpoint '{ep_config.name}' must define 'dsn' or 'host'")
    return UserConfig(protocol=ep_config.protocol.value or DEFAULT_PROTOCOL,
                      host=ep_config.host.value,
                      port=ep_config.port.value,
                      http_path=ep_config.http_path.value,
                      max_rows=ep_config.max_rows.value,
                      query_timeout=_seconds(ep_config.timeout.value),
                      retry_max=ep_config.retry_max.value,
                      retry_wait_min=_seconds(ep_config.retry_wait_min.value),
                      retry_wait_max=_seconds(ep_config.retry_wait_max.value))

def build_config(dsn: str=None, *, user_config: UserConfig=None, access_token: str=None,
                 authenticator: Authenticator=None, catalog: str=None, schema: str=None,
                 max_rows: int=None, query_timeout: datetime.timedelta=None,
                 user_agent_entry: str=None, timezone: str=None,
                 session_params: Mapping[str, str]=None, tls_config: TLSConfig=DEFAULT) -> Config:
    """Builds full driver configuration.

    Arguments:
        dsn: DSN or endpoint configuration name.
        user_config: User configuration, alternative to `dsn`.
        access_token: Personal access token.
        authenticator: Authenticator, takes precedence over `access_token`.
        catalog: Initial catalog.
        schema: Initial schema.
        max_rows: Max. number of rows fetched in single page.
        query_timeout: Timeout passed to server for query processing.
        user_agent_entry: Suffix appended to User-Agent header.
        timezone: Session time zone name.
        session_params: Session parameters, added to those from DSN or endpoint configuration.
        tls_config: TLS policy, None disables TLS.

    Endpoint configuration (registered endpoint, or `.DriverConfig.endpoint_defaults`)
    provides values for catalog, schema, user agent entry, access token, time zone
    and session parameters not specified by DSN. Keyword arguments take precedence
    over both.

    Raises:
        InterfaceError: When neither or both `dsn` and `user_config` are specified.

    Hooks:
        Event `.ConfigHook.BUILT`: Executed before `Config` instance is returned.
        Hook must have signature::

            hook_func(config: Config) -> Optional[Config]

        Hook may return `Config` instance that replaces the configuration passed
        to next hooks and returned by this function.
    """
    ep_config = None if dsn is None else driver_config.get_endpoint(dsn)
    if ep_config is None:
        ep_config = driver_config.endpoint_defaults
    else:
        dsn = ep_config.dsn.value
        if dsn is None and user_config is None:
            user_config = _from_endpoint(ep_config)
    if (dsn is None) == (user_config is None):
        raise InterfaceError("Must supply one of:\n"
                             " 1. DSN or registered endpoint name\n"
                             " 2. keyword argument user_config")
    if user_config is None:
        user_config = parse_dsn(dsn)
    # Endpoint values fill what DSN or user config left unset
    changes: Dict[str, Any] = {}
    for fld in ('catalog', 'schema', 'user_agent_entry', 'access_token'):
        if getattr(user_config, fld) is None:
            value = getattr(ep_config, fld).value
            if value is not None:
                changes[fld] = value
    if user_config.location is None and ep_config.timezone.value is not None:
        changes['location'] = Location.load(ep_config.timezone.value)
    params = ep_config.get_session_params()
    params.update(user_config.session_params or {})
    # Keyword arguments
    for fld, value in (('catalog', catalog), ('schema', schema), ('max_rows', max_rows),
                       ('query_timeout', query_timeout), ('user_agent_entry', user_agent_entry),
                       ('access_token', access_token), ('authenticator', authenticator)):
        if value is not None:
            changes[fld] = value
    if timezone is not None:
        changes['location'] = Location.load(timezone)
    if session_params is not None:
        params.update(session_params)
    changes['session_params'] = params
    token = changes.get('access_token', user_config.access_token)
    if token and authenticator is None \
       and isinstance(user_config.authenticator, (NoopAuth, PATAuth, type(None))):
        changes['authenticator'] = PATAuth(token)
    user_config = user_config.with_overrides(**changes).with_defaults()
    # Process-level settings
    config = default_config()
    overrides: Dict[str, Any] = {'user_config': user_config}
    if tls_config is not DEFAULT:
        overrides['tls_config'] = tls_config
    for fld in ('run_async', 'can_use_multiple_catalogs', 'thrift_debug_client_protocol'):
        value = getattr(driver_config, fld).value
        if value is not None:
            overrides[fld] = value
    for fld in ('poll_interval', 'client_timeout', 'ping_timeout'):
        value = getattr(driver_config, fld).value
        if value is not None:
            overrides[fld] = datetime.timedelta(seconds=value)
    config = config.with_overrides(**overrides)
    for hook in get_callbacks(ConfigHook.BUILT, Config):
        try:
            result = hook(config)
        except Exception as e:
            raise InterfaceError("Error in CONFIG_BUILT hook.", *e.args) from e
        if result is not None:
            config = result
    return config

# Register hookable classes
register_class(UserConfig, UserConfigHook)
register_class(Config, ConfigHook)
del register_class
del add_hook
