from sqlalchemy import Boolean, CheckConstraint, Index, Integer, Text, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Character(Base):
    __tablename__ = "characters"
    __table_args__ = (
        CheckConstraint("length(character) > 0", name="ck_characters_character_not_empty"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    character: Mapped[str] = mapped_column(Text, nullable=False)  # 汉字
    definition: Mapped[str | None] = mapped_column(Text, nullable=True, default="")
    pinyin: Mapped[str | None] = mapped_column(Text, nullable=True, default="")
    radical: Mapped[str | None] = mapped_column(Text, nullable=True, default="")
    hsk_level: Mapped[int | None] = mapped_column(Integer, nullable=True)  # lower = more basic
    is_radical: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("0")
    )
    radical_variants: Mapped[str | None] = mapped_column(Text, nullable=True)

    # enrichment
    script_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    stroke_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    decomposition: Mapped[str | None] = mapped_column(Text, nullable=True)  # raw IDS
    variants: Mapped[str | None] = mapped_column(Text, nullable=True)
    etymology: Mapped[str | None] = mapped_column(Text, nullable=True)  # "type: hint"

    def __repr__(self) -> str:
        return f"Character(id={self.id!r}, character={self.character!r})"


# uniqueness lives in an explicit index so it can be added to older tables too
character_unique_index = Index("idx_characters_character", Character.character, unique=True)

# nullable columns that may be missing from tables created by older versions
ADDITIVE_COLUMNS = (
    "hsk_level",
    "radical_variants",
    "script_type",
    "stroke_count",
    "decomposition",
    "variants",
    "etymology",
)
