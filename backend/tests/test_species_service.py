"""
Biodex Backend — Species Service Unit Tests
=============================================

What:  Tests for SpeciesService business logic (list, get, update, delete).
Why:   The service is the authoritative ownership check for every write.
How:   Uses mock DB sessions returning real Species instances (no real DB).

What we test:
    ✅ List returns every species with its count
    ✅ Missing species raises NotFoundError
    ✅ Owner update rewrites the six fields, never id or author
    ✅ Non-owner update/delete raises PermissionDeniedError and writes nothing
    ✅ Database failures surface as DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from biodex.exceptions import DatabaseError, NotFoundError, PermissionDeniedError
from biodex.models.species import Species
from biodex.schemas.species import SpeciesForm
from biodex.services.species_service import SpeciesService


def make_species(**overrides):
    values = dict(
        id=7,
        scientific_name="Cavia porcellus",
        common_name="Guinea pig",
        kingdom="Animalia",
        total_population=300000,
        image=None,
        description="A domesticated rodent.",
        author="u1",
    )
    values.update(overrides)
    return Species(**values)


def returns_row(session, row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    session.execute.return_value = result


def make_form(**overrides):
    values = dict(
        scientific_name="Cavia aperea",
        common_name="Brazilian guinea pig",
        kingdom="Animalia",
        total_population=None,
        image=None,
        description=None,
    )
    values.update(overrides)
    return SpeciesForm.model_validate(values)


class TestSpeciesServiceList:

    def setup_method(self):
        self.service = SpeciesService()

    @pytest.mark.asyncio
    async def test_list_species(self, mock_db_session):
        """Rows come back in the order the query returns them."""
        rows = [make_species(id=8, scientific_name="Quercus robur", kingdom="Plantae", author="u2"),
                make_species()]
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = result

        response = await self.service.list_species(mock_db_session)

        assert response.total_count == 2
        assert [s.id for s in response.species] == [8, 7]

    @pytest.mark.asyncio
    async def test_list_species_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError):
            await self.service.list_species(mock_db_session)


class TestSpeciesServiceGet:

    def setup_method(self):
        self.service = SpeciesService()

    @pytest.mark.asyncio
    async def test_get_species_found(self, mock_db_session):
        returns_row(mock_db_session, make_species())

        record = await self.service.get_species(mock_db_session, 7)

        assert record.id == 7
        assert record.author == "u1"

    @pytest.mark.asyncio
    async def test_get_species_not_found(self, mock_db_session):
        """Non-existent species should raise NotFoundError."""
        returns_row(mock_db_session, None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_species(mock_db_session, 999)
        assert exc_info.value.message == "species with ID '999' was not found"


class TestSpeciesServiceUpdate:

    def setup_method(self):
        self.service = SpeciesService()

    @pytest.mark.asyncio
    async def test_owner_update(self, mock_db_session):
        row = make_species()
        returns_row(mock_db_session, row)

        record = await self.service.update_species(mock_db_session, 7, "u1", make_form())

        assert record.scientific_name == "Cavia aperea"
        assert record.description is None
        assert record.total_population is None
        assert row.id == 7
        assert row.author == "u1"
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_owner_update_rejected(self, mock_db_session):
        row = make_species()
        returns_row(mock_db_session, row)

        with pytest.raises(PermissionDeniedError):
            await self.service.update_species(mock_db_session, 7, "u2", make_form())

        assert row.scientific_name == "Cavia porcellus"
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_missing_species(self, mock_db_session):
        returns_row(mock_db_session, None)

        with pytest.raises(NotFoundError):
            await self.service.update_species(mock_db_session, 999, "u1", make_form())

    @pytest.mark.asyncio
    async def test_update_flush_failure(self, mock_db_session):
        returns_row(mock_db_session, make_species())
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("check constraint"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.update_species(mock_db_session, 7, "u1", make_form())
        assert exc_info.value.context["species_id"] == 7


class TestSpeciesServiceDelete:

    def setup_method(self):
        self.service = SpeciesService()

    @pytest.mark.asyncio
    async def test_owner_delete(self, mock_db_session):
        row = make_species()
        returns_row(mock_db_session, row)

        await self.service.delete_species(mock_db_session, 7, "u1")

        mock_db_session.delete.assert_awaited_once_with(row)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_owner_delete_rejected(self, mock_db_session):
        returns_row(mock_db_session, make_species())

        with pytest.raises(PermissionDeniedError) as exc_info:
            await self.service.delete_species(mock_db_session, 7, "u2")

        assert exc_info.value.message == "You do not have permission to modify this species"
        mock_db_session.delete.assert_not_awaited()
