import pytest

from capability_registry.capabilities.errors import DescriptorSyntaxError
from capability_registry.discovery.parser import is_dotted_identifier, parse_descriptors, parse_line


def test_strips_comments_blank_lines_and_duplicates() -> None:
    lines = ["  foo.Bar  # comment", "", "# full comment", "foo.Bar", "baz.Qux"]

    assert parse_descriptors([("services/a", lines)]) == ["foo.Bar", "baz.Qux"]


def test_deduplicates_across_resources_in_first_seen_order() -> None:
    sources = [
        ("first", ["b.Second", "a.First"]),
        ("second", ["a.First", "c.Third", "b.Second"]),
    ]

    assert parse_descriptors(sources) == ["b.Second", "a.First", "c.Third"]


def test_no_sources_yield_no_names() -> None:
    assert parse_descriptors([]) == []


def test_comment_only_line_is_skipped() -> None:
    assert parse_line("services/a", 1, "   #foo.Bar") is None


def test_rejects_interior_space() -> None:
    with pytest.raises(DescriptorSyntaxError, match="illegal descriptor syntax") as exc_info:
        parse_descriptors([("services/a", ["ok.Name", "foo. Bar"])])

    assert exc_info.value.location == "services/a"
    assert exc_info.value.line_number == 2
    assert exc_info.value.line == "foo. Bar"


def test_rejects_interior_tab() -> None:
    with pytest.raises(DescriptorSyntaxError, match="services/b:1"):
        parse_descriptors([("services/b", ["foo\tBar"])])


def test_rejects_invalid_first_character() -> None:
    with pytest.raises(DescriptorSyntaxError, match="illegal implementation name"):
        parse_line("services/a", 3, "1foo.Bar")


def test_rejects_invalid_continuation_character() -> None:
    with pytest.raises(DescriptorSyntaxError, match="illegal implementation name: foo-bar.Baz"):
        parse_line("services/a", 1, "foo-bar.Baz")


def test_accepts_unicode_identifiers_and_underscores() -> None:
    assert parse_line("services/a", 1, "_paquete.Señal2") == "_paquete.Señal2"


def test_dotted_identifier_rules() -> None:
    assert is_dotted_identifier("a.b.C")
    assert is_dotted_identifier("a..b")
    assert not is_dotted_identifier(".a")
    assert not is_dotted_identifier("")
