# SPDX-FileCopyrightText: 2024-present The dbsql-driver Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dbsql-driver
# FILE:           tests/conftest.py
# DESCRIPTION:    Common fixtures
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

from __future__ import annotations

import pytest
from dbsql.driver import core
from dbsql.driver.config import DriverConfig
from dbsql.driver.hooks import hook_manager

class _LogRecorder:
    def __init__(self):
        self.records = []
    def __call__(self, agent):
        return self
    def warning(self, msg, *args, **kwargs):
        self.records.append(('WARNING', msg))

def pytest_report_header(config):
    """Returns plugin-specific test session header.

    .. seealso:: `pytest documentation <_pytest.hookspec.pytest_report_header>` for details.
    """
    return [f"dbsql-driver: {core.DRIVER_NAME} v{core.DRIVER_VERSION}"]

@pytest.fixture
def driver_cfg(monkeypatch):
    monkeypatch.delenv('DBSQL_ACCESS_TOKEN', raising=False)
    cfg = DriverConfig('dbsql.driver')
    monkeypatch.setattr(core, 'driver_config', cfg)
    yield cfg

@pytest.fixture(autouse=True)
def hooks_reset():
    hook_manager.remove_all_hooks()
    yield
    hook_manager.remove_all_hooks()

@pytest.fixture
def log_records(monkeypatch):
    recorder = _LogRecorder()
    monkeypatch.setattr(core, 'get_logger', recorder)
    yield recorder.records
