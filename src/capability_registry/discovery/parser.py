from collections.abc import Iterable

from ..capabilities.errors import DescriptorSyntaxError

COMMENT_MARKER = "#"


def parse_descriptors(sources: Iterable[tuple[str, Iterable[str]]]) -> list[str]:
    """Merge descriptor sources into one list of candidate implementation names.

    Args:
        sources: ``(location, lines)`` pairs in discovery order.

    Returns:
        Distinct names in first-seen order across every source.

    Raises:
        DescriptorSyntaxError: If any line is malformed.
    """
    names: list[str] = []
    seen: set[str] = set()
    for location, lines in sources:
        for line_number, raw_line in enumerate(lines, start=1):
            name = parse_line(location, line_number, raw_line)
            if name is None or name in seen:
                continue
            seen.add(name)
            names.append(name)
    return names


def parse_line(location: str, line_number: int, raw_line: str) -> str | None:
    line = raw_line.split(COMMENT_MARKER, 1)[0].strip()
    if not line:
        return None

    if " " in line or "\t" in line:
        raise DescriptorSyntaxError(location, line_number, line, "illegal descriptor syntax")

    if not is_dotted_identifier(line):
        raise DescriptorSyntaxError(location, line_number, line, "illegal implementation name")

    return line


def is_dotted_identifier(value: str) -> bool:
    if not value or not value[0].isidentifier():
        return False
    return all(char == "." or f"_{char}".isidentifier() for char in value[1:])
