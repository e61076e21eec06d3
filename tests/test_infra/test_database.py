"""Tests for the Database component."""

import pytest
from sqlalchemy import select

from lager.infra.database import Database
from lager.models import Category


class TestDatabase:
    """Tests for session handling."""

    @pytest.mark.asyncio
    async def test_session_commits(self, database: Database):
        async with database.session() as session:
            session.add(Category(name="Haushalt", slug="haushalt"))

        async with database.session() as session:
            slugs = list(await session.scalars(select(Category.slug)))
        assert slugs == ["haushalt"]

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self, database: Database):
        with pytest.raises(RuntimeError):
            async with database.session() as session:
                session.add(Category(name="Haushalt", slug="haushalt"))
                await session.flush()
                raise RuntimeError("abort")

        async with database.session() as session:
            assert list(await session.scalars(select(Category))) == []

    @pytest.mark.asyncio
    async def test_verify_connection(self, database: Database):
        assert await database.verify_connection() is True
        assert database.dialect == "sqlite"
