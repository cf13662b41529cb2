"""
Ingestion pipelines.

Every pipeline decodes its whole source before touching the store, then
applies one write per record inside a single transaction. Any error discards
that transaction, so a run either lands completely or not at all.

Dictionary and metadata sync only enrich rows that already exist. Run them
after seed_characters / sync_hsk_levels, otherwise their rows are dropped.
"""
import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from hanzidb import store
from hanzidb.sources import read_level_rows, read_metadata, read_seed_records, read_structure_records

logger = logging.getLogger(__name__)


def parse_level(descriptor: str | None) -> int | None:
    """
    "4-5" -> 4, "2" -> 2. Anything that does not give a positive tier
    (blank, "0", "new", "-3") means the row has no level.
    """
    if descriptor is None:
        return None
    head = descriptor.split("-", 1)[0].strip()
    try:
        level = int(head)
    except ValueError:
        return None
    return level if level > 0 else None


def is_single_character(display: str) -> bool:
    return len(display) == 1


async def _prepare(session: AsyncSession) -> None:
    async with session.begin():
        await store.ensure_schema(session)


async def sync_hsk_levels(session: AsyncSession, source: Path) -> int:
    logger.info("Syncing HSK levels from %s", source)
    rows = read_level_rows(source)

    await _prepare(session)

    processed = 0
    async with session.begin():
        for row in rows:
            display = row.display.strip()
            if not is_single_character(display):
                continue
            level = parse_level(row.descriptor)
            if level is None:
                logger.debug("Line %d: no usable level in %r, skipped", row.line, row.descriptor)
                continue
            await store.upsert_level(session, display, level)
            processed += 1

    logger.info("HSK sync done: %d of %d rows applied", processed, len(rows))
    return processed


async def import_dictionary(session: AsyncSession, source: Path) -> int:
    logger.info("Importing structure data from %s", source)
    records = read_structure_records(source)

    await _prepare(session)

    processed = 0
    updated = 0
    async with session.begin():
        # variants were once filled with bad data; metadata sync refills them
        await store.reset_variants_field(session)
        for record in records:
            if not record.character:
                continue
            updated += await store.update_structure(
                session,
                record.character,
                record.decomposition,
                record.etymology.describe(),
            )
            processed += 1

    logger.info(
        "Dictionary import done: %d processed, %d updated, %d not in store",
        processed,
        updated,
        processed - updated,
    )
    return processed


async def sync_metadata(session: AsyncSession, source: Path) -> int:
    logger.info("Syncing metadata from %s", source)
    entries = read_metadata(source)

    await _prepare(session)

    processed = 0
    updated = 0
    async with session.begin():
        for character, entry in entries.items():
            updated += await store.update_metadata(
                session,
                character,
                entry.script,
                entry.strokes,
                entry.variant,
            )
            processed += 1

    logger.info(
        "Metadata sync done: %d processed, %d updated, %d not in store",
        processed,
        updated,
        processed - updated,
    )
    return processed


async def seed_characters(session: AsyncSession, source: Path) -> int:
    """Creates (or refreshes) base rows from the dictionary file."""
    logger.info("Seeding characters from %s", source)
    records = read_seed_records(source)

    await _prepare(session)

    processed = 0
    async with session.begin():
        for record in records:
            if not record.character:
                continue
            await store.upsert_base(
                session,
                record.character,
                definition=record.definition,
                pinyin=record.pinyin,
                radical=record.radical,
                is_radical=record.is_radical,
                radical_variants=record.variants,
                hsk_level=record.hsk,
            )
            processed += 1

    logger.info("Seed done: %d characters", processed)
    return processed
