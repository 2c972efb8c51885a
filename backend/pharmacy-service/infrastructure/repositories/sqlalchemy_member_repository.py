"""SQLAlchemy implementation of the member repository.

This module contains the concrete implementation of the MemberRepository
using SQLAlchemy for database operations.
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from domain.entities.member import Member
from domain.entities.search import MEMBER_SEARCH_FIELDS, MemberSearchCriteria
from domain.repositories.member_repository import MemberRepository
from infrastructure.models.member_orm import MemberORM
from infrastructure.repositories.sqlalchemy_search_repository import (
    SQLAlchemySearchRepository,
)

logger = logging.getLogger(__name__)


class SQLAlchemyMemberRepository(MemberRepository):
    """SQLAlchemy implementation of the member repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.
    """

    def __init__(self, today: Callable[[], date] = date.today):
        """Initialize the repository.

        Args:
            today: Clock used by age filters in advanced search.
        """
        self._search_engine = SQLAlchemySearchRepository(
            MemberORM, MEMBER_SEARCH_FIELDS, self._orm_to_domain_entity, today=today
        )

    async def get_all(self, db_session: Session) -> List[Member]:
        member_orms = db_session.query(MemberORM).order_by(MemberORM.id).all()
        return [self._orm_to_domain_entity(member_orm) for member_orm in member_orms]

    async def get_by_id(self, db_session: Session, member_id: int) -> Optional[Member]:
        member_orm = db_session.query(MemberORM).filter(MemberORM.id == member_id).first()
        return self._orm_to_domain_entity(member_orm) if member_orm else None

    async def get_by_member_number(
        self, db_session: Session, member_number: str
    ) -> Optional[Member]:
        member_orm = (
            db_session.query(MemberORM)
            .filter(MemberORM.member_number == member_number)
            .first()
        )
        return self._orm_to_domain_entity(member_orm) if member_orm else None

    async def get_by_gender(self, db_session: Session, gender: str) -> List[Member]:
        member_orms = (
            db_session.query(MemberORM)
            .filter(func.lower(MemberORM.gender) == gender.strip().lower())
            .order_by(MemberORM.id)
            .all()
        )
        return [self._orm_to_domain_entity(member_orm) for member_orm in member_orms]

    async def search(self, db_session: Session, search_term: str) -> List[Member]:
        """Free-text search over first name, last name, member number and email.

        Args:
            db_session (Session): SQLAlchemy database session for this operation.
            search_term (str): Case-insensitive substring to look for.

        Returns:
            List[Member]: Matching members ordered by identifier.
        """
        term = search_term.strip()
        member_orms = (
            db_session.query(MemberORM)
            .filter(
                or_(
                    MemberORM.first_name.icontains(term, autoescape=True),
                    MemberORM.last_name.icontains(term, autoescape=True),
                    MemberORM.member_number.icontains(term, autoescape=True),
                    MemberORM.email.icontains(term, autoescape=True),
                )
            )
            .order_by(MemberORM.id)
            .all()
        )
        logger.info(f"Member search for '{term}' found {len(member_orms)} members")
        return [self._orm_to_domain_entity(member_orm) for member_orm in member_orms]

    async def advanced_search(
        self, db_session: Session, criteria: MemberSearchCriteria
    ) -> Tuple[List[Member], int]:
        return await self._search_engine.search(db_session, criteria)

    async def add(self, db_session: Session, member: Member) -> Member:
        """Create a new member in the repository.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            member (Member): Domain Member entity to create

        Returns:
            Member: Created member with assigned ID

        Raises:
            Exception: If creation fails at the data layer
        """
        try:
            member_orm = MemberORM(
                member_number=member.member_number,
                first_name=member.first_name,
                last_name=member.last_name,
                dob=member.dob,
                gender=member.gender,
                address=member.address,
                phone=member.phone,
                email=member.email,
            )

            db_session.add(member_orm)
            db_session.commit()
            db_session.refresh(member_orm)

            return self._orm_to_domain_entity(member_orm)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create member: {str(e)}")
            raise

    async def update(self, db_session: Session, member: Member) -> Optional[Member]:
        """Persist changes to an existing member.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            member (Member): Domain Member entity carrying the new values

        Returns:
            Optional[Member]: Updated member, or None if the member does not exist
        """
        try:
            member_orm = (
                db_session.query(MemberORM).filter(MemberORM.id == member.id).first()
            )
            if not member_orm:
                return None

            member_orm.first_name = member.first_name
            member_orm.last_name = member.last_name
            member_orm.dob = member.dob
            member_orm.gender = member.gender
            member_orm.address = member.address
            member_orm.phone = member.phone
            member_orm.email = member.email

            db_session.commit()
            db_session.refresh(member_orm)

            return self._orm_to_domain_entity(member_orm)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update member {member.id}: {str(e)}")
            raise

    async def delete(self, db_session: Session, member_id: int) -> bool:
        try:
            member_orm = (
                db_session.query(MemberORM).filter(MemberORM.id == member_id).first()
            )
            if not member_orm:
                return False

            db_session.delete(member_orm)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete member {member_id}: {str(e)}")
            raise

    async def member_number_exists(self, db_session: Session, member_number: str) -> bool:
        return (
            db_session.query(MemberORM.id)
            .filter(MemberORM.member_number == member_number)
            .first()
            is not None
        )

    @staticmethod
    def _orm_to_domain_entity(member_orm: MemberORM) -> Member:
        """Convert a MemberORM object to a Member domain entity.

        Args:
            member_orm: SQLAlchemy ORM object

        Returns:
            Member domain entity
        """
        return Member(
            id=member_orm.id,
            member_number=member_orm.member_number,
            first_name=member_orm.first_name,
            last_name=member_orm.last_name,
            dob=member_orm.dob,
            gender=member_orm.gender,
            address=member_orm.address,
            phone=member_orm.phone,
            email=member_orm.email,
        )
