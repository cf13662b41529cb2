from pydantic import BaseModel, ConfigDict


class CharacterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    character: str
    pinyin: str | None = None
    radical: str | None = None
    definition: str | None = None
    hsk_level: int | None = None
    is_radical: bool = False
    script_type: str | None = None
    stroke_count: int | None = None
    decomposition: str | None = None
    variants: str | None = None
    radical_variants: str | None = None
    etymology: str | None = None


class ComponentsOut(BaseModel):
    decomposition: str
    components: list[str]
    count: int
    results: list[CharacterOut]


class CommandMessage(BaseModel):
    message: str
