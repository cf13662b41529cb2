"""
Read and write primitives for the ``characters`` table.

None of these functions commit: batch pipelines wrap them in a single
``session.begin()`` block so a failure anywhere rolls back the whole batch.
"""
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator

from sqlalchemy import case, inspect, or_, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.schema import CreateIndex, CreateTable
from sqlalchemy.ext.asyncio import AsyncSession

from hanzidb.errors import CharacterNotFound, HanziError, StoreQueryError, StoreWriteError
from hanzidb.models import ADDITIVE_COLUMNS, Character, character_unique_index

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str, error_cls: type[HanziError]) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise error_cls(operation, exc) from exc


# =========================
# Schema
# =========================

def _already_applied(exc: OperationalError) -> bool:
    # another connection ran the same DDL between our check and our statement
    message = str(exc.orig).lower()
    return "already exists" in message or "duplicate column name" in message


def _execute_ddl(sync_conn, ddl) -> bool:
    try:
        if isinstance(ddl, str):
            sync_conn.exec_driver_sql(ddl)
        else:
            sync_conn.execute(ddl)
    except OperationalError as exc:
        if not _already_applied(exc):
            raise
        return False
    return True


def _migrate(sync_conn) -> list[str]:
    table = Character.__table__
    _execute_ddl(sync_conn, CreateTable(table, if_not_exists=True))

    existing = {col["name"] for col in inspect(sync_conn).get_columns(table.name)}

    added: list[str] = []
    for name in ADDITIVE_COLUMNS:
        if name in existing:
            continue
        column = table.c[name]
        ddl = f"ALTER TABLE {table.name} ADD COLUMN {name} {column.type.compile(dialect=sync_conn.dialect)}"
        if _execute_ddl(sync_conn, ddl):
            added.append(name)

    # tables created before the index existed only get it here
    _execute_ddl(sync_conn, CreateIndex(character_unique_index, if_not_exists=True))
    return added


async def ensure_schema(session: AsyncSession) -> None:
    """Creates the table and unique index if needed and adds missing columns."""
    with _store_errors("ensure_schema", StoreWriteError):
        conn = await session.connection()
        added = await conn.run_sync(_migrate)
    if added:
        logger.info("Added columns to characters: %s", ", ".join(added))


# =========================
# Writes
# =========================

async def upsert_level(session: AsyncSession, character: str, level: int) -> None:
    stmt = sqlite_insert(Character).values(character=character, hsk_level=level)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Character.character],
        set_={"hsk_level": stmt.excluded.hsk_level},
        # most basic level wins
        where=or_(
            Character.hsk_level.is_(None),
            stmt.excluded.hsk_level < Character.hsk_level,
        ),
    )
    with _store_errors("upsert_level", StoreWriteError):
        await session.execute(stmt)


async def upsert_base(
    session: AsyncSession,
    character: str,
    definition: str,
    pinyin: str,
    radical: str,
    is_radical: bool,
    radical_variants: str | None,
    hsk_level: int | None = None,
) -> None:
    stmt = sqlite_insert(Character).values(
        character=character,
        definition=definition,
        pinyin=pinyin,
        radical=radical,
        is_radical=is_radical,
        radical_variants=radical_variants,
        hsk_level=hsk_level,
    )
    excluded = stmt.excluded
    stmt = stmt.on_conflict_do_update(
        index_elements=[Character.character],
        set_={
            "definition": excluded.definition,
            "pinyin": excluded.pinyin,
            "radical": excluded.radical,
            "is_radical": excluded.is_radical,
            "radical_variants": excluded.radical_variants,
            "hsk_level": _lowest_level(excluded.hsk_level),
        },
    )
    with _store_errors("upsert_base", StoreWriteError):
        await session.execute(stmt)


def _lowest_level(incoming):
    return case(
        (incoming.is_(None), Character.hsk_level),
        (Character.hsk_level.is_(None), incoming),
        (incoming < Character.hsk_level, incoming),
        else_=Character.hsk_level,
    )


async def update_structure(
    session: AsyncSession,
    character: str,
    decomposition: str,
    etymology: str,
) -> int:
    """Enriches an existing row; an unknown character is a no-op returning 0."""
    stmt = (
        update(Character)
        .where(Character.character == character)
        .values(decomposition=decomposition, etymology=etymology)
        .execution_options(synchronize_session=False)
    )
    with _store_errors("update_structure", StoreWriteError):
        result = await session.execute(stmt)
    return result.rowcount


async def update_metadata(
    session: AsyncSession,
    character: str,
    script_type: str | None,
    stroke_count: int | None,
    variants: str | None,
) -> int:
    stmt = (
        update(Character)
        .where(Character.character == character)
        .values(script_type=script_type, stroke_count=stroke_count, variants=variants)
        .execution_options(synchronize_session=False)
    )
    with _store_errors("update_metadata", StoreWriteError):
        result = await session.execute(stmt)
    return result.rowcount


async def reset_variants_field(session: AsyncSession) -> int:
    stmt = update(Character).values(variants=None).execution_options(synchronize_session=False)
    with _store_errors("reset_variants_field", StoreWriteError):
        result = await session.execute(stmt)
    return result.rowcount


# =========================
# Reads
# =========================

async def get_by_character(session: AsyncSession, character: str) -> Character:
    stmt = select(Character).where(Character.character == character)
    with _store_errors("get_by_character", StoreQueryError):
        result = await session.execute(stmt)
        found = result.scalars().first()
    if found is None:
        raise CharacterNotFound(character)
    return found


async def get_by_characters(session: AsyncSession, characters: Iterable[str]) -> list[Character]:
    """
    One membership query for the whole set. Order follows the table, not the
    input, and duplicates in the input come back once.
    """
    wanted = set(characters)
    if not wanted:
        return []

    stmt = select(Character).where(Character.character.in_(sorted(wanted))).order_by(Character.id)
    with _store_errors("get_by_characters", StoreQueryError):
        result = await session.execute(stmt)
        return list(result.scalars().all())
