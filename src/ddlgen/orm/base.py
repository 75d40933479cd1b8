"""Declarative base with a portable type map for DDL generation.

Models do not have to derive from :class:`DdlBase`; any SQLAlchemy 2.0
declarative base works.  ``DdlBase`` only saves spelling out lengths that
several dialects insist on:

* ``str``   → ``String(255)``  (MySQL and Oracle reject length-less VARCHAR)
* ``int``   → ``Integer``
* ``bool``  → ``Boolean``
* ``datetime.datetime`` → ``DateTime``
* ``datetime.date``     → ``Date``
* ``decimal.Decimal``   → ``Numeric(19, 2)``
"""

from __future__ import annotations

import datetime
import decimal

from sqlalchemy import Boolean, Date, DateTime, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase


class DdlBase(DeclarativeBase):
    """Shared declarative base for models scanned by ddlgen."""

    type_annotation_map = {
        str: String(255),
        int: Integer,
        bool: Boolean,
        datetime.datetime: DateTime,
        datetime.date: Date,
        decimal.Decimal: Numeric(19, 2),
    }
