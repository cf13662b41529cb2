from sqlalchemy.ext.asyncio import AsyncSession

from hanzidb import store
from hanzidb.decomposition import parse_decomposition
from hanzidb.models import Character


async def get_character_details(session: AsyncSession, target: str) -> Character:
    return await store.get_by_character(session, target)


async def get_component_details(session: AsyncSession, decomposition: str) -> list[Character]:
    """
    Records for the components named in an IDS string.

    The result is not aligned with the parsed components: repeated components
    come back once and components missing from the store are left out.
    """
    components = parse_decomposition(decomposition)
    if not components:
        return []
    return await store.get_by_characters(session, components)
