"""
Tests for point and component lookups
"""
import pytest
import pytest_asyncio

from conftest import DICTIONARY, write_dictionary
from hanzidb import ingest, queries
from hanzidb.errors import CharacterNotFound


@pytest_asyncio.fixture
async def seeded(sessions, tmp_path):
    path = write_dictionary(tmp_path / "dictionary.txt", DICTIONARY)
    async with sessions() as session:
        await ingest.seed_characters(session, path)


def _selects(statements: list[str]) -> list[str]:
    return [s for s in statements if s.lstrip().upper().startswith("SELECT")]


@pytest.mark.asyncio
async def test_character_details(sessions, seeded):
    async with sessions() as session:
        record = await queries.get_character_details(session, "林")
    assert record.definition == "forest, grove"
    assert record.radical == "木"


@pytest.mark.asyncio
async def test_character_details_not_found(sessions, seeded):
    async with sessions() as session:
        with pytest.raises(CharacterNotFound):
            await queries.get_character_details(session, "龘")


@pytest.mark.asyncio
async def test_components_in_one_query(sessions, seeded, statements):
    async with sessions() as session:
        found = await queries.get_component_details(session, "⿱日木")

    assert sorted(r.character for r in found) == ["日", "木"]
    assert len(_selects(statements)) == 1


@pytest.mark.asyncio
async def test_duplicated_component_comes_back_once(sessions, seeded):
    async with sessions() as session:
        found = await queries.get_component_details(session, "⿰木木")

    assert [r.character for r in found] == ["木"]


@pytest.mark.asyncio
async def test_unknown_components_are_left_out(sessions, seeded):
    async with sessions() as session:
        assert await queries.get_component_details(session, "⿱龍⿰龍龍") == []
        partial = await queries.get_component_details(session, "⿱日十")

    # 十 is not in the store: no 1:1 correspondence with the components
    assert [r.character for r in partial] == ["日"]


@pytest.mark.asyncio
@pytest.mark.parametrize("decomposition", ["", "⿰", "⿱⿰"])
async def test_empty_decomposition_does_not_query(sessions, seeded, statements, decomposition):
    async with sessions() as session:
        assert await queries.get_component_details(session, decomposition) == []

    assert statements == []
