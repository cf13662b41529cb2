from sqladmin import ModelView

from hanzidb.models import Character


class CharacterAdmin(ModelView, model=Character):
    column_list = ["id", "character", "pinyin", "hsk_level", "stroke_count", "script_type"]
    column_searchable_list = ["character", "pinyin", "definition"]
    column_sortable_list = ["id", "hsk_level", "stroke_count"]
    column_default_sort = ("id", False)  # False = asc
    page_size = 50
