# Ideographic Description Characters: ⿰ ⿱ ⿲ ⿳ ⿴ ⿵ ⿶ ⿷ ⿸ ⿹ ⿺ ⿻
_IDC_FIRST = 0x2FF0
_IDC_LAST = 0x2FFB


def is_description_operator(ch: str) -> bool:
    return _IDC_FIRST <= ord(ch) <= _IDC_LAST


def parse_decomposition(sequence: str | None) -> list[str]:
    """
    Returns the component characters of an Ideographic Description Sequence.

    Structural operators are dropped, everything else is kept in order,
    duplicates included. The sequence is not checked for being a well-formed
    tree, so malformed input just yields its non-operator characters.
    """
    if not sequence:
        return []
    return [ch for ch in sequence if not is_description_operator(ch)]
