import re
from typing import Dict

# <Tag> or <Tag:value>, same shape the editor writes into note boxes
_META_RE = re.compile(r"<([^<>:]+)(:?)([^>]*)>")


def extract_metadata(note: str) -> Dict[str, str | bool]:
    """
    Pull <Tag> / <Tag:value> pairs out of a free-text note.

    <Dice_mult>       -> {"Dice_mult": True}
    <Dice_mult:1.5>   -> {"Dice_mult": "1.5"}
    <Dice_state:5-10> -> {"Dice_state": "5-10"}

    Later tags with the same name win.
    """
    meta: Dict[str, str | bool] = {}
    for match in _META_RE.finditer(note or ""):
        name, colon, value = match.groups()
        meta[name] = value if colon else True
    return meta
