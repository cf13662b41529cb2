import logging

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from sqladmin import Admin

from hanzidb import commands
from hanzidb.admin import CharacterAdmin
from hanzidb.db import create_engine_for
from hanzidb.decomposition import parse_decomposition
from hanzidb.errors import (
    CharacterNotFound,
    HanziError,
    PathResolutionError,
    SourceParseError,
    SourceReadError,
)
from hanzidb.logging_config import setup_logging
from hanzidb.paths import database_path
from hanzidb.schemas import CharacterOut, CommandMessage, ComponentsOut

logger = logging.getLogger(__name__)

setup_logging()

app = FastAPI(title="Hanzi Character Store")


def mount_admin(app: FastAPI) -> Admin | None:
    """
    Mounts the admin views when the store path resolves. Without a store path
    the API still starts and reports the resolution error per request.
    """
    try:
        db_path = database_path()
    except PathResolutionError as exc:
        logger.warning("Admin views disabled: %s", exc)
        return None

    admin = Admin(app, create_engine_for(db_path))
    admin.add_view(CharacterAdmin)
    return admin


admin = mount_admin(app)

_STATUS_CODES = {
    CharacterNotFound: 404,
    PathResolutionError: 404,
    SourceReadError: 404,
    SourceParseError: 422,
}


@app.exception_handler(HanziError)
async def hanzi_error_handler(request: Request, exc: HanziError):
    status_code = next(
        (code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)),
        500,
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/api/characters/{target}", response_model=CharacterOut)
async def api_character(target: str):
    return await commands.get_character_details(target)


@app.get("/api/components", response_model=ComponentsOut)
async def api_components(
    decomposition: str = Query("", description="Ideographic Description Sequence"),
):
    results = await commands.get_component_details(decomposition)
    return ComponentsOut(
        decomposition=decomposition,
        components=parse_decomposition(decomposition),
        count=len(results),
        results=[CharacterOut.model_validate(r) for r in results],
    )


@app.post("/api/admin/backup", response_model=CommandMessage)
async def api_backup():
    return CommandMessage(message=await commands.backup_database())


@app.post("/api/admin/seed", response_model=CommandMessage)
async def api_seed():
    return CommandMessage(message=await commands.seed_characters())


@app.post("/api/admin/sync-hsk", response_model=CommandMessage)
async def api_sync_hsk():
    return CommandMessage(message=await commands.sync_hsk_levels())


@app.post("/api/admin/import-dictionary", response_model=CommandMessage)
async def api_import_dictionary():
    return CommandMessage(message=await commands.import_dictionary_data())


@app.post("/api/admin/sync-metadata", response_model=CommandMessage)
async def api_sync_metadata():
    return CommandMessage(message=await commands.sync_json_metadata())
