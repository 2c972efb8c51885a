"""Declarative base shared by the member and provider tables.

Constraint names follow a fixed convention so the unique keys on member
number, provider number and NPI get the same names on PostgreSQL and SQLite.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
