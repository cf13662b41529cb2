"""
Pytest configuration and fixtures
"""
import json
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import event

from hanzidb import store
from hanzidb.db import create_engine_for, make_sessionmaker
from hanzidb.settings import settings


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "hanzi.db"


@pytest_asyncio.fixture
async def engine(db_path: Path):
    engine = create_engine_for(db_path)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessions(engine):
    """Session factory; tests open a fresh session per step"""
    return make_sessionmaker(engine)


@pytest_asyncio.fixture
async def schema(sessions):
    async with sessions() as session, session.begin():
        await store.ensure_schema(session)


@pytest.fixture
def statements(engine) -> list[str]:
    """Every SQL statement sent to the database after the fixture is requested"""
    seen: list[str] = []

    def receive_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", receive_before_cursor_execute)
    yield seen
    event.remove(engine.sync_engine, "before_cursor_execute", receive_before_cursor_execute)


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """Points the global settings at an empty project directory"""
    monkeypatch.setattr(settings, "runtime", "dev")
    monkeypatch.setattr(settings, "project_root", tmp_path)
    (tmp_path / settings.data_dir).mkdir()
    return tmp_path


def write_level_csv(path: Path, rows: list[tuple[str, str]]) -> Path:
    lines = ["word,pinyin,meaning,pos,level"]
    for display, level in rows:
        lines.append(f"{display},,,,{level}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_dictionary(path: Path, records: list[dict]) -> Path:
    path.write_text(
        "\n".join(json.dumps(r, ensure_ascii=False) for r in records) + "\n",
        encoding="utf-8",
    )
    return path


def write_metadata(path: Path, entries: dict) -> Path:
    path.write_text(json.dumps(entries, ensure_ascii=False), encoding="utf-8")
    return path


DICTIONARY = [
    {
        "character": "木",
        "definition": "tree; wood",
        "pinyin": ["mù"],
        "decomposition": "？",
        "radical": "木",
        "etymology": {"type": "pictographic", "hint": "A tree"},
    },
    {
        "character": "林",
        "definition": "forest, grove",
        "pinyin": ["lín"],
        "decomposition": "⿰木木",
        "radical": "木",
        "etymology": {"type": "ideographic", "hint": "Two trees"},
    },
    {
        "character": "日",
        "definition": "sun; day",
        "pinyin": ["rì"],
        "decomposition": "？",
        "radical": "日",
    },
    {
        "character": "早",
        "definition": "early; morning",
        "pinyin": ["zǎo"],
        "decomposition": "⿱日十",
        "radical": "日",
        "etymology": {"type": "ideographic", "hint": None},
    },
]
