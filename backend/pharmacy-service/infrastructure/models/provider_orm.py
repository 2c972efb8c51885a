"""SQLAlchemy ORM model for Provider entity.

This module contains the ProviderORM class that defines the database schema
for providers and handles provider data persistence.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by
    the SQLAlchemyProviderRepository implementation. Domain code should use
    the Provider entity instead.
"""

from sqlalchemy import Column, Integer, String

from infrastructure.models.base import Base


class ProviderORM(Base):
    """SQLAlchemy ORM model for providers.

    Table Schema:
        - Table name: 'providers'
        - Primary key: id (Integer)
        - Unique constraints: provider_number, npi
    """

    __tablename__ = "providers"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True,
        comment="Primary key, auto-incremented",
    )

    provider_number = Column(
        String(50),
        unique=True,
        nullable=False,
        comment="Provider number, unique across all providers",
    )

    name = Column(String(200), nullable=False, comment="Provider display name")

    # National Provider Identifier (10 digits)
    npi = Column(String(10), unique=True, nullable=False, comment="NPI, unique")

    address = Column(String(500), nullable=False, default="")
    phone = Column(String(20), nullable=False, default="")
    email = Column(String(100), nullable=False, default="")
    specialty = Column(String(100), nullable=False, default="")

    def __repr__(self) -> str:
        return (
            f"<ProviderORM(id={self.id}, provider_number='{self.provider_number}', "
            f"npi='{self.npi}')>"
        )

    def __str__(self) -> str:
        return self.name
