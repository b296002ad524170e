# tests/test_transcoder.py

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from typing import List, Tuple

import pytest

from gedcom2xml.loader import GedcomStructureError, GedcomSyntaxError, iter_records, tokenize_file
from gedcom2xml.transcoder import (
    PROLOGUE,
    LevelTreeTranscoder,
    escape_attr,
    escape_xml,
    iter_fragments,
    transcode,
    transcode_text,
)
from gedcom2xml.utils import mock_file_path


def _document(body: str, root: str = "gedcom") -> str:
    return f"{PROLOGUE}<{root}>\n{body}\n</{root}>"


def _walk(element: ET.Element, depth: int = 0) -> List[Tuple[str, int]]:
    found = []
    for child in element:
        found.append((child.tag, depth + 1))
        found.extend(_walk(child, depth + 1))
    return found


# ---------------------------------------------------------
# Exact output
# ---------------------------------------------------------
def test_individual_with_leaf_children() -> None:
    xml = transcode_text("0 INDI\n1 NAME John /Doe/\n1 SEX M")

    assert xml == _document(
        "<INDI>\n"
        "  <NAME>John /Doe/</NAME>\n"
        "  <SEX>M</SEX>\n"
        "</INDI>"
    )


def test_single_reference_record_is_a_leaf() -> None:
    assert transcode_text("0 @I1@ INDI") == _document("<INDI>@I1@</INDI>")


def test_reference_record_with_children_gets_value_attribute() -> None:
    xml = transcode_text("0 @I1@ INDI\n1 SEX M")

    assert xml == _document(
        '<INDI value="@I1@">\n'
        "  <SEX>M</SEX>\n"
        "</INDI>"
    )


def test_value_with_children_becomes_attribute() -> None:
    xml = transcode_text("0 HEAD\n1 SOUR PAF\n2 VERS 5.5\n1 CHAR UTF-8")

    assert xml == _document(
        "<HEAD>\n"
        '  <SOUR value="PAF">\n'
        "    <VERS>5.5</VERS>\n"
        "  </SOUR>\n"
        "  <CHAR>UTF-8</CHAR>\n"
        "</HEAD>"
    )


def test_returning_several_levels_closes_each_element() -> None:
    xml = transcode_text("0 A\n1 B\n2 C x\n0 D")

    assert xml == _document(
        "<A>\n"
        "  <B>\n"
        "    <C>x</C>\n"
        "  </B>\n"
        "</A>\n"
        "<D></D>"
    )


def test_end_of_stream_closes_every_open_element() -> None:
    xml = transcode_text("0 A\n1 B\n2 C deep")

    assert xml == _document(
        "<A>\n"
        "  <B>\n"
        "    <C>deep</C>\n"
        "  </B>\n"
        "</A>"
    )


def test_multiple_top_level_records_are_siblings_under_root() -> None:
    root = ET.fromstring(transcode_text("0 HEAD\n0 @I1@ INDI\n0 TRLR").encode("utf-8"))

    assert root.tag == "gedcom"
    assert [child.tag for child in root] == ["HEAD", "INDI", "TRLR"]


def test_empty_input_yields_empty_root() -> None:
    assert transcode_text("") == f"{PROLOGUE}<gedcom>\n</gedcom>"
    assert transcode_text("\n   \n") == f"{PROLOGUE}<gedcom>\n</gedcom>"


def test_custom_root_and_indent() -> None:
    xml = transcode_text("0 A\n1 B b", root_tag="family", indent="\t")

    assert xml == f"{PROLOGUE}<family>\n<A>\n\t<B>b</B>\n</A>\n</family>"


# ---------------------------------------------------------
# Escaping
# ---------------------------------------------------------
def test_escape_xml_covers_markup_and_quotes() -> None:
    assert escape_xml("""a & b < "c" 'd' >""") == (
        "a &amp; b &lt; &quot;c&quot; &apos;d&apos; &gt;"
    )


def test_escaped_text_and_attribute_decode_to_original() -> None:
    text_value = """Springfield, "Old" <County> & Co's"""
    attr_value = """<Source & "friends">"""
    xml = transcode_text(f"0 HEAD\n1 SOUR {attr_value}\n2 VERS 1\n1 PLAC {text_value}")

    head = ET.fromstring(xml.encode("utf-8")).find("HEAD")
    assert head.find("SOUR").get("value") == attr_value
    assert head.find("PLAC").text == text_value
    assert "&amp;amp;" not in xml


# ---------------------------------------------------------
# Structural properties
# ---------------------------------------------------------
def test_mock_file_depth_matches_levels() -> None:
    path = mock_file_path("gedcom_1.ged")
    records = list(tokenize_file(path))

    out = io.StringIO()
    with path.open(encoding="utf-8") as fh:
        transcode(fh, out)
    root = ET.fromstring(out.getvalue().encode("utf-8"))

    expected = [
        (r.data if r.is_reference else r.tag, r.level + 1) for r in records
    ]
    assert _walk(root) == expected


def test_value_placement_follows_next_record_depth() -> None:
    root = ET.fromstring(transcode_text(
        "0 HEAD\n1 SOUR PAF\n2 VERS 5.5\n1 CHAR UTF-8"
    ).encode("utf-8"))

    sour = root.find("HEAD/SOUR")
    assert sour.get("value") == "PAF"
    assert (sour.text or "").strip() == ""

    char = root.find("HEAD/CHAR")
    assert char.text == "UTF-8"
    assert char.get("value") is None


def test_blank_lines_do_not_change_output() -> None:
    dense = "0 HEAD\n1 CHAR UTF-8\n0 @I1@ INDI\n1 NAME Jo\n0 TRLR"
    sparse = "\n0 HEAD\n\n   \n1 CHAR UTF-8\n0 @I1@ INDI\n\n1 NAME Jo\n0 TRLR\n\n"

    assert transcode_text(dense) == transcode_text(sparse)


def test_stack_is_empty_after_finish() -> None:
    tx = LevelTreeTranscoder()
    parts = list(iter_fragments(iter_records(["0 A", "1 B", "2 C"]), transcoder=tx))

    assert tx.state.stack == []
    assert "".join(parts).count("</") == 4


def test_stack_depth_tracks_level() -> None:
    tx = LevelTreeTranscoder()
    tx.begin()
    for record in iter_records(["0 A", "1 B", "2 C", "1 D", "0 E"]):
        tx.feed(record)
        assert tx.state.depth == record.level + 1


def test_reference_extra_data_is_dropped_and_counted() -> None:
    tx = LevelTreeTranscoder()
    xml = "".join(iter_fragments(iter_records(["0 @N1@ NOTE some text"]), transcoder=tx))

    assert "<NOTE>@N1@</NOTE>" in xml
    assert "some text" not in xml
    assert tx.stats.dropped_data == 1


def test_stats_are_collected() -> None:
    out = io.StringIO()
    stats = transcode(["0 HEAD", "1 CHAR UTF-8", "0 @I1@ INDI", "1 BIRT", "2 DATE 1900"], out)

    assert stats.records == 5
    assert stats.top_level == 2
    assert stats.references == 1
    assert stats.max_depth == 3


# ---------------------------------------------------------
# Failures
# ---------------------------------------------------------
def test_malformed_level_aborts_conversion() -> None:
    out = io.StringIO()
    with pytest.raises(GedcomSyntaxError) as excinfo:
        transcode(["0 HEAD", "abc TAG value", "0 TRLR"], out)

    assert excinfo.value.lineno == 2
    assert not out.getvalue().endswith("</gedcom>")


def test_reference_without_tag_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        transcode_text("0 @I1@")


def test_level_jump_raises_structure_error() -> None:
    with pytest.raises(GedcomStructureError) as excinfo:
        transcode_text("0 A\n2 B")
    assert excinfo.value.lineno == 2


def test_first_record_must_be_level_zero() -> None:
    with pytest.raises(GedcomStructureError):
        transcode_text("1 NAME orphan")


def test_feed_after_finish_raises() -> None:
    tx = LevelTreeTranscoder()
    tx.begin()
    tx.finish()
    with pytest.raises(RuntimeError):
        tx.feed(next(iter_records(["0 HEAD"])))


# ---------------------------------------------------------
# Round-trip edge cases
# ---------------------------------------------------------
def test_attribute_value_keeps_tab() -> None:
    xml = transcode_text("0 HEAD\n1 SOUR a\tb\n2 VERS 1")

    assert 'value="a&#9;b"' in xml
    sour = ET.fromstring(xml.encode("utf-8")).find("HEAD/SOUR")
    assert sour.get("value") == "a\tb"


def test_escape_attr_uses_character_references_for_whitespace() -> None:
    assert escape_attr('a\tb\nc\rd "e"') == "a&#9;b&#10;c&#13;d &quot;e&quot;"


def test_text_helper_splits_on_newlines_like_streams() -> None:
    text = "0 HEAD\n1 NOTE page\x0cbreak\n1 NOTE sep\x1eand\x85more\n0 TRLR"

    out = io.StringIO()
    transcode(io.StringIO(text), out)

    assert transcode_text(text) == out.getvalue()
    assert transcode_text("0 HEAD\r\n1 CHAR UTF-8\r\n") == transcode_text("0 HEAD\n1 CHAR UTF-8\n")


def test_control_characters_are_replaced_so_output_parses() -> None:
    xml = transcode_text("0 HEAD\n1 NOTE page\x0cbreak\x00end\n1 SOUR x\x01y\n2 VERS 1")

    head = ET.fromstring(xml.encode("utf-8")).find("HEAD")
    assert head.find("NOTE").text == "page\ufffdbreak\ufffdend"
    assert head.find("SOUR").get("value") == "x\ufffdy"
