"""
The operations a host application calls.

Each command opens its own store session (read-only for lookups), runs one
query or pipeline and closes the session again. Failures are logged and
re-raised as HanziError; str(exc) is the message to show.
"""
import logging
import shutil
from datetime import datetime
from pathlib import Path

from hanzidb import ingest, queries
from hanzidb.db import open_session
from hanzidb.decomposition import parse_decomposition
from hanzidb.errors import HanziError, SourceReadError, StoreWriteError
from hanzidb.models import Character
from hanzidb.paths import data_file, database_path, resolve_path
from hanzidb.settings import settings

logger = logging.getLogger(__name__)


async def get_character_details(target: str) -> Character:
    async with open_session(database_path(), read_only=True) as session:
        return await queries.get_character_details(session, target)


async def get_component_details(decomposition: str) -> list[Character]:
    # nothing to look up, so don't open the store at all
    if not parse_decomposition(decomposition):
        return []
    async with open_session(database_path(), read_only=True) as session:
        return await queries.get_component_details(session, decomposition)


async def _run_pipeline(name: str, pipeline, source_name: str) -> int:
    try:
        source = data_file(source_name)
        async with open_session(database_path()) as session:
            return await pipeline(session, source)
    except HanziError as exc:
        logger.error("%s aborted: %s", name, exc)
        raise


async def sync_hsk_levels() -> str:
    count = await _run_pipeline("sync_hsk_levels", ingest.sync_hsk_levels, settings.hsk_file)
    return f"Synced {count} HSK levels"


async def import_dictionary_data() -> str:
    count = await _run_pipeline("import_dictionary_data", ingest.import_dictionary, settings.dictionary_file)
    return f"Processed structure data for {count} characters"


async def sync_json_metadata() -> str:
    count = await _run_pipeline("sync_json_metadata", ingest.sync_metadata, settings.metadata_file)
    return f"Synced metadata for {count} characters"


async def seed_characters() -> str:
    count = await _run_pipeline("seed_characters", ingest.seed_characters, settings.dictionary_file)
    return f"Seeded {count} characters"


def _backup_target(now: datetime | None = None) -> Path:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return resolve_path(settings.backup_dir) / f"hanzi_backup_{stamp}.db"


async def backup_database() -> str:
    db_path = database_path()
    if not db_path.is_file():
        raise SourceReadError("backup_database", f"no database at {db_path}")

    target = _backup_target()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(db_path, target)
    except OSError as exc:
        logger.error("Backup of %s failed: %s", db_path, exc)
        raise StoreWriteError("backup_database", exc) from exc

    logger.info("Backed up %s to %s", db_path, target)
    return f"Backup saved to {target}"
