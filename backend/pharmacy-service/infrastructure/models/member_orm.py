"""SQLAlchemy ORM model for Member entity.

This module contains the MemberORM class that defines the database schema
for pharmacy plan members.

Classes:
    MemberORM: SQLAlchemy model for members with a unique member number.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SQLAlchemyMemberRepository implementation
    - Database schema creation at startup
    - Other infrastructure-specific code

    Domain code should use the Member entity instead of this ORM model.
"""

from sqlalchemy import Column, Date, Integer, String

from infrastructure.models.base import Base


class MemberORM(Base):
    """SQLAlchemy ORM model for pharmacy plan members.

    Attributes:
        id (int): Primary key, auto-incremented.
        member_number (str): Business-unique member number, max 50 characters.
        first_name (str): First name, max 100 characters.
        last_name (str): Last name, max 100 characters.
        dob (date): Date of birth.
        gender (str): Gender, max 10 characters.
        address (str): Address, max 500 characters.
        phone (str): Phone number, max 20 characters.
        email (str): Email address, max 100 characters.

    Table Schema:
        - Table name: 'members'
        - Primary key: id (Integer)
        - Unique constraint: member_number
    """

    __tablename__ = "members"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True,
        comment="Primary key, auto-incremented",
    )

    member_number = Column(
        String(50),
        unique=True,
        nullable=False,
        comment="Member number, unique across all members",
    )

    first_name = Column(String(100), nullable=False, comment="Member first name")
    last_name = Column(String(100), nullable=False, comment="Member last name")
    dob = Column(Date, nullable=False, comment="Member date of birth")
    gender = Column(String(10), nullable=False, comment="Male, Female or Other")

    # Contact details
    address = Column(String(500), nullable=False, default="")
    phone = Column(String(20), nullable=False, default="")
    email = Column(String(100), nullable=False, default="")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<MemberORM(id={self.id}, member_number='{self.member_number}', "
            f"name='{self.first_name} {self.last_name}')>"
        )
