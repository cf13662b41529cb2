"""
Readers for the three source files.

Each reader turns a file into typed records with explicit per-field defaults.
Reading problems raise SourceReadError, malformed content raises
SourceParseError, so neither can be confused with a store failure.
"""
import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Iterator, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from hanzidb.errors import SourceParseError, SourceReadError


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


# JSON null reads the same as a missing field
Text = Annotated[str, BeforeValidator(_none_to_empty)]

RecordT = TypeVar("RecordT", bound=BaseModel)


# =========================
# Level table (CSV)
# =========================

DISPLAY_COLUMN = 0
LEVEL_COLUMN = 4


@dataclass(frozen=True)
class LevelRow:
    line: int
    display: str
    descriptor: str | None  # None when the row has no level column


def read_level_rows(path: Path) -> list[LevelRow]:
    """Rows of the level table after the header, in file order."""
    rows: list[LevelRow] = []
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)  # header
            for record in reader:
                if not record:
                    continue
                descriptor = record[LEVEL_COLUMN] if len(record) > LEVEL_COLUMN else None
                rows.append(LevelRow(line=reader.line_num, display=record[DISPLAY_COLUMN], descriptor=descriptor))
    except csv.Error as exc:
        raise SourceParseError("read_level_rows", exc, line=reader.line_num) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError("read_level_rows", f"{path}: {exc}") from exc
    return rows


# =========================
# Dictionary (line-delimited JSON)
# =========================

class Etymology(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Text = ""
    hint: Text = ""

    def describe(self) -> str:
        return f"{self.type}: {self.hint}"


class StructureRecord(BaseModel):
    """The fields dictionary sync writes; everything else on the line is ignored."""

    model_config = ConfigDict(extra="ignore")

    character: Text = ""
    decomposition: Text = ""
    etymology: Etymology = Field(default_factory=Etymology)

    @field_validator("etymology", mode="before")
    @classmethod
    def _etymology_default(cls, value: Any) -> Any:
        return {} if value is None else value


class SeedRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    character: Text = ""
    definition: Text = ""
    pinyin: str = ""
    radical: Text = ""
    hsk: int | None = None
    variants: str | None = None

    @field_validator("pinyin", mode="before")
    @classmethod
    def _join_pinyin(cls, value: Any) -> str:
        # readings come as a list; anything else means "no reading"
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return ""

    @field_validator("hsk", mode="before")
    @classmethod
    def _falsy_level(cls, value: Any) -> Any:
        return value or None

    @field_validator("variants", mode="before")
    @classmethod
    def _variants_text(cls, value: Any) -> Any:
        if isinstance(value, list):
            return ", ".join(str(v) for v in value) or None
        return value or None

    @property
    def is_radical(self) -> bool:
        return bool(self.character) and self.character == self.radical


def iter_dictionary_records(path: Path, model: type[RecordT]) -> Iterator[RecordT]:
    """One record per non-blank line; each line is a standalone JSON object."""
    try:
        with path.open("r", encoding="utf-8") as f:
            for line_no, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line:
                    continue
                try:
                    yield model.model_validate(json.loads(line))
                except (json.JSONDecodeError, ValidationError) as exc:
                    raise SourceParseError("read_dictionary", exc, line=line_no) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError("read_dictionary", f"{path}: {exc}") from exc


def read_structure_records(path: Path) -> list[StructureRecord]:
    return list(iter_dictionary_records(path, StructureRecord))


def read_seed_records(path: Path) -> list[SeedRecord]:
    return list(iter_dictionary_records(path, SeedRecord))


# =========================
# Metadata map (JSON object)
# =========================

class MetadataEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    script: str | None = None
    strokes: int | None = None
    variant: str | None = None


_metadata_adapter = TypeAdapter(dict[str, MetadataEntry])


def read_metadata(path: Path) -> dict[str, MetadataEntry]:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError("read_metadata", f"{path}: {exc}") from exc

    try:
        return _metadata_adapter.validate_python(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise SourceParseError("read_metadata", exc.msg, line=exc.lineno) from exc
    except ValidationError as exc:
        raise SourceParseError("read_metadata", exc) from exc
