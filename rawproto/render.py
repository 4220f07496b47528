import json
from typing import Iterable, List, Optional

from . import Casing, DecodedField
from .const import INDENT_WIDTH, WIRE_LEN_DELIM


def _text_lines(fields: Iterable[DecodedField], indent: int) -> List[str]:
    lines: List[str] = []
    for field in fields:
        pad = " " * (indent * field.depth)
        lines.append("")
        lines.append(f"{pad}fieldId={field.number}")
        lines.append(f"{pad}fieldType={field.wire_type_description or ''}")

        if field.wire_type != WIRE_LEN_DELIM:
            lines.append(f"{pad}val=({field.value});")
            continue

        for value in field.value:
            lines.append(f"{pad}val=({value.display_text});")
            if value.nested:
                lines.extend(_text_lines(value.nested, indent))
    return lines


def render_text(fields: Iterable[DecodedField], indent: int = INDENT_WIDTH) -> str:
    """
    Render decoded fields the way the console dump prints them: a blank line
    then `fieldId`, `fieldType` and one `val` line per value, indented by
    `indent` spaces for every level of nesting.
    """
    return "\n".join(_text_lines(fields, indent))


def to_json(
    fields: Iterable[DecodedField],
    indent: Optional[int] = None,
    casing: Casing = Casing.CAMEL,
) -> str:
    """Returns the decoded tree as a JSON list of field objects."""
    return json.dumps([field.to_dict(casing) for field in fields], indent=indent)
