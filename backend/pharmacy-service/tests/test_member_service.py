"""
Tests for MemberService - member business rules and the record cache.

Tests cover:
- Read-through caching on lookup by identifier
- Cache maintenance on update and delete
- Duplicate member numbers
- Not-found handling
"""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis

from domain.entities.member import Member
from domain.repositories.cache_repository import NullRecordCache
from domain.services.member_service import (
    MemberAlreadyExistsError,
    MemberNotFoundError,
    MemberService,
)
from infrastructure.cache.redis_cache import RedisRecordCache, create_record_cache
from infrastructure.repositories.sqlalchemy_member_repository import (
    SQLAlchemyMemberRepository,
)


def build_member(member_id=1, **overrides) -> Member:
    values = {
        "id": member_id,
        "member_number": f"M{member_id or 0:03d}",
        "first_name": "Ravi",
        "last_name": "Kumar",
        "dob": date(1980, 5, 1),
        "gender": "Male",
        "address": "12 Park Lane",
        "phone": "555-0100",
        "email": "ravi@example.com",
    }
    values.update(overrides)
    return Member(**values)


@pytest.fixture
def member_repository():
    return AsyncMock()


@pytest.fixture
def member_service(member_repository, record_cache):
    return MemberService(member_repository, record_cache)


class TestMemberLookupCache:
    """Tests for MemberService.get_member_by_id()"""

    @pytest.mark.asyncio
    async def test_miss_reads_store_and_fills_cache(
        self, member_service, member_repository, record_cache
    ):
        member_repository.get_by_id.return_value = build_member(7)

        member = await member_service.get_member_by_id(None, 7)

        assert member.member_number == "M007"
        assert json.loads(record_cache.store["member:7"])["dob"] == "1980-05-01"

    @pytest.mark.asyncio
    async def test_hit_skips_store(self, member_service, member_repository, record_cache):
        record_cache.store["member:7"] = json.dumps(build_member(7).to_dict())

        member = await member_service.get_member_by_id(None, 7)

        assert member == build_member(7)
        member_repository.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_unreadable_entry_falls_back_to_store(
        self, member_service, member_repository, record_cache
    ):
        record_cache.store["member:7"] = "{not json"
        member_repository.get_by_id.return_value = build_member(7)

        member = await member_service.get_member_by_id(None, 7)

        assert member.id == 7
        member_repository.get_by_id.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_member_is_not_cached(
        self, member_service, member_repository, record_cache
    ):
        member_repository.get_by_id.return_value = None

        with pytest.raises(MemberNotFoundError):
            await member_service.get_member_by_id(None, 99)

        assert "member:99" not in record_cache.store

    @pytest.mark.asyncio
    async def test_works_without_cache(self, member_repository):
        member_repository.get_by_id.return_value = build_member(3)
        service = MemberService(member_repository)

        first = await service.get_member_by_id(None, 3)
        second = await service.get_member_by_id(None, 3)

        assert first == second
        assert member_repository.get_by_id.await_count == 2


class TestMemberWrites:
    """Create, update and delete rules."""

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_member_number(
        self, member_service, member_repository
    ):
        member_repository.member_number_exists.return_value = True

        with pytest.raises(MemberAlreadyExistsError):
            await member_service.create_member(None, build_member(None))

        member_repository.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_rewrites_cache(
        self, member_service, member_repository, record_cache
    ):
        record_cache.store["member:1"] = json.dumps(build_member(1).to_dict())
        member_repository.get_by_id.return_value = build_member(1)
        member_repository.update.side_effect = lambda db, member: member

        updated = await member_service.update_member(
            None,
            1,
            first_name="Ravi",
            last_name="Kumaran",
            dob=date(1980, 5, 1),
            gender="Male",
        )

        assert updated.last_name == "Kumaran"
        assert json.loads(record_cache.store["member:1"])["last_name"] == "Kumaran"

    @pytest.mark.asyncio
    async def test_update_unknown_member(self, member_service, member_repository):
        member_repository.get_by_id.return_value = None

        with pytest.raises(MemberNotFoundError):
            await member_service.update_member(
                None, 5, "A", "B", date(1990, 1, 1), "Female"
            )

    @pytest.mark.asyncio
    async def test_delete_drops_cache(
        self, member_service, member_repository, record_cache
    ):
        record_cache.store["member:1"] = json.dumps(build_member(1).to_dict())
        member_repository.delete.return_value = True

        await member_service.delete_member(None, 1)

        assert "member:1" not in record_cache.store

    @pytest.mark.asyncio
    async def test_delete_unknown_member(self, member_service, member_repository):
        member_repository.delete.return_value = False

        with pytest.raises(MemberNotFoundError):
            await member_service.delete_member(None, 1)

    @pytest.mark.asyncio
    async def test_search_requires_term(self, member_service):
        with pytest.raises(ValueError):
            await member_service.search_members(None, "   ")


class TestMemberServiceWithStore:
    """MemberService against the SQLite store."""

    @pytest.mark.asyncio
    async def test_create_then_lookups(self, db_session, record_cache):
        service = MemberService(SQLAlchemyMemberRepository(), record_cache)

        created = await service.create_member(db_session, build_member(None))

        assert created.id is not None
        assert await service.member_number_exists(db_session, created.member_number)
        by_number = await service.get_member_by_member_number(
            db_session, created.member_number
        )
        assert by_number.id == created.id
        assert [m.id for m in await service.get_members_by_gender(db_session, "male")] == [
            created.id
        ]
        assert [m.id for m in await service.search_members(db_session, "KUM")] == [
            created.id
        ]

    @pytest.mark.asyncio
    async def test_duplicate_member_number_in_store(self, db_session):
        service = MemberService(SQLAlchemyMemberRepository())
        await service.create_member(db_session, build_member(None, member_number="DUP"))

        with pytest.raises(MemberAlreadyExistsError):
            await service.create_member(
                db_session, build_member(None, member_number="DUP")
            )

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, db_session):
        service = MemberService(SQLAlchemyMemberRepository())
        created = await service.create_member(db_session, build_member(None))

        await service.delete_member(db_session, created.id)

        with pytest.raises(MemberNotFoundError):
            await service.get_member_by_id(db_session, created.id)


class TestRedisRecordCache:
    """Redis failures never fail a lookup."""

    @pytest.mark.asyncio
    async def test_errors_are_swallowed_as_misses(self):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("refused")
        client.set.side_effect = redis.ConnectionError("refused")
        client.delete.side_effect = redis.ConnectionError("refused")
        cache = RedisRecordCache(client)

        assert await cache.get_string("member:1") is None
        await cache.set_string("member:1", "{}")
        await cache.delete("member:1")

    @pytest.mark.asyncio
    async def test_round_trip_through_client(self):
        client = MagicMock()
        client.get.return_value = '{"id": 1}'
        cache = RedisRecordCache(client)

        await cache.set_string("member:1", '{"id": 1}')

        client.set.assert_called_once_with("member:1", '{"id": 1}')
        assert await cache.get_string("member:1") == '{"id": 1}'

    def test_empty_url_disables_cache(self):
        assert isinstance(create_record_cache(""), NullRecordCache)
