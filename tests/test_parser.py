"""Tests for the Slov-Lex version page parser with hierarchical extraction."""

import pytest
from slovlex.parser import (
    CHAPTER_LOOKBACK_CHARS,
    StructureError,
    build_provision_content,
    extract_predpis_block,
    find_chapter_label,
    parse_act_from_version_page,
    parse_provisions,
)
from slovlex.targets import get_target_law
from slovlex.types import DocumentStatus


PREDPIS_OPEN = '<div class="predpis Skupina " id="predpis">'


def _paragraf(number, body, label=None, heading=None):
    label = f"§ {number}" if label is None else label
    parts = [f'<div class="paragraf Skupina " id="paragraf-{number}">']
    if label:
        parts.append(f'<div class="paragrafOznacenie">{label}</div>')
    if heading:
        parts.append(f'<div class="paragrafNadpis NADPIS">{heading}</div>')
    parts.append(body)
    parts.append("</div>")
    return "".join(parts)


def _odsek(marker, text, children=""):
    marker_div = f'<div class="odsekOznacenie">{marker}</div>' if marker else ""
    return f'<div class="odsek">{marker_div}<div class="text">{text}</div>{children}</div>'


def _pismeno(marker, text):
    return f'<div class="pismeno"><div class="pismenoOznacenie">{marker}</div><div class="text">{text}</div></div>'


_CITATION_LINK = '<a class="citacnyOdkazJednoduchy" href="#poznamky.poznamka-3">3)</a>'

_PARAGRAF_1 = _paragraf(
    1,
    _odsek("", "Tento zákon upravuje ochranu fyzických osôb pri spracúvaní osobných údajov."),
    heading="Predmet úpravy",
)
_PARAGRAF_2 = _paragraf(
    2,
    _odsek(
        "",
        "Na účely tohto zákona sa rozumie",
        _pismeno("a)", "osobnými údajmi údaje týkajúce sa identifikovanej fyzickej osoby,")
        + _pismeno("b)", "dotknutou osobou každá fyzická osoba, ktorej osobné údaje sa spracúvajú,"),
    ),
    heading="Vymedzenie pojmov",
)
_PARAGRAF_5A = _paragraf(
    "5a",
    _odsek("(1)", f"Osobné údaje musia byť spracúvané zákonným spôsobom{_CITATION_LINK}.")
    + _odsek("(2)", "Prevádzkovateľ je zodpovedný za dodržiavanie odseku 1<sup>4</sup>."),
    label="§  5a",
)
_PARAGRAF_6 = _paragraf(6, '<div class="text">…</div>')

VERSION_HTML = f"""
<html>
  <head><title>18/2018 Z. z. - Slov-Lex</title></head>
  <body>
    <h1>18/2018 Z. z.</h1>
    <div class="predpisDatum">29. novembra 2017</div>
    <div class="predpisNadpis NADPIS">o ochrane osobných údajov a o zmene a doplnení niektorých zákonov</div>
    {PREDPIS_OPEN}
      <div class="castOznacenie">PRVÁ ČASŤ</div>
      <div class="castNadpis NADPIS">ZÁKLADNÉ USTANOVENIA</div>
      {_PARAGRAF_1}
      {_PARAGRAF_2}
      <div class="castOznacenie">DRUHÁ ČASŤ</div>
      <div class="hlavaOznacenie">PRVÁ HLAVA</div>
      <div class="hlavaNadpis NADPIS">ZÁSADY SPRACÚVANIA</div>
      {_PARAGRAF_5A}
      {_PARAGRAF_6}
    </div>
    <div id="Poznamky">
      <div class="paragraf Skupina " id="paragraf-99"><div class="paragrafOznacenie">§ 99</div><div class="text">Poznámka pod čiarou.</div></div>
    </div>
  </body>
</html>
"""


class TestExtractPredpisBlock:
    def test_block_starts_at_root_and_stops_before_notes(self):
        block = extract_predpis_block(VERSION_HTML)
        assert block.startswith(PREDPIS_OPEN)
        assert "Poznámka pod čiarou" not in block
        assert "Tento zákon upravuje" in block

    def test_earliest_end_marker_wins(self):
        html = f'{PREDPIS_OPEN}text<div id="Prilohy">annex</div><div id="Poznamky">notes</div>'
        assert extract_predpis_block(html) == f"{PREDPIS_OPEN}text"

    def test_without_end_marker_runs_to_end(self):
        html = f"<p>header</p>{PREDPIS_OPEN}text"
        assert extract_predpis_block(html) == f"{PREDPIS_OPEN}text"

    def test_missing_root_raises(self):
        with pytest.raises(StructureError):
            extract_predpis_block("<html><body><div class='obsah'>nic</div></body></html>")


class TestBuildProvisionContent:
    def test_markers_prefixed_to_text(self):
        html = _paragraf(3, _odsek("(1)", "Prvý odsek.", _pismeno("a)", "písmeno a,")) + _odsek("(2)", "Druhý odsek."))
        assert build_provision_content(html) == "(1) Prvý odsek.\na) písmeno a,\n(2) Druhý odsek."

    def test_multiple_markers_buffered_until_text(self):
        html = (
            '<div class="odsekOznacenie">(1)</div>'
            '<div class="pismenoOznacenie">a)</div>'
            '<div class="bodOznacenie">1.</div>'
            '<div class="text">text bodu</div>'
        )
        assert build_provision_content(html) == "(1) a) 1. text bodu"

    def test_label_and_heading_excluded(self):
        html = _paragraf(4, _odsek("", "Obsah paragrafu."), heading="Nadpis")
        content = build_provision_content(html)
        assert content == "Obsah paragrafu."
        assert "§ 4" not in content
        assert "Nadpis" not in content

    def test_empty_markers_ignored(self):
        html = '<div class="odsekOznacenie"> </div><div class="text">Text.</div>'
        assert build_provision_content(html) == "Text."

    def test_fallback_to_whole_fragment(self):
        html = _paragraf(7, "<p>Voľný text bez <b>značiek</b>.</p>")
        assert build_provision_content(html) == "Voľný text bez značiek ."

    def test_only_consecutive_duplicates_collapsed(self):
        html = "".join(
            f'<div class="text">{line}</div>' for line in ("Riadok A", "Riadok A", "Riadok B", "Riadok A")
        )
        assert build_provision_content(html).split("\n") == ["Riadok A", "Riadok B", "Riadok A"]

    def test_idempotent_on_clean_text(self):
        text = "(1) Tento zákon upravuje ochranu fyzických osôb."
        once = build_provision_content(f'<div class="text">{text}</div>')
        assert once == text
        assert build_provision_content(once) == once


class TestFindChapterLabel:
    def test_units_joined_broad_to_narrow(self):
        html = (
            '<div class="castOznacenie">PRVÁ ČASŤ</div>'
            '<div class="dielOznacenie">Prvý diel</div><div class="dielNadpis NADPIS">Úvod</div>'
            '<div class="hlavaOznacenie">PRVÁ HLAVA</div>'
        )
        assert find_chapter_label(html, len(html)) == "PRVÁ ČASŤ / PRVÁ HLAVA / Prvý diel Úvod"

    def test_last_occurrence_per_unit(self):
        html = '<div class="castOznacenie">PRVÁ ČASŤ</div><div class="castOznacenie">DRUHÁ ČASŤ</div>'
        assert find_chapter_label(html, len(html)) == "DRUHÁ ČASŤ"

    def test_only_text_before_position_considered(self):
        html = '<div class="castOznacenie">PRVÁ ČASŤ</div>XYZ<div class="castOznacenie">DRUHÁ ČASŤ</div>'
        assert find_chapter_label(html, html.index("XYZ")) == "PRVÁ ČASŤ"

    def test_no_units(self):
        assert find_chapter_label("<div class='text'>bez hierarchie</div>", 30) is None

    def test_lookback_is_bounded(self):
        marker = '<div class="castOznacenie">PRVÁ ČASŤ</div>'
        html = marker + " " * (CHAPTER_LOOKBACK_CHARS + 1)
        assert find_chapter_label(html, len(html)) is None

    def test_marker_inside_window_found(self):
        marker = '<div class="castOznacenie">PRVÁ ČASŤ</div>'
        html = marker + " " * (CHAPTER_LOOKBACK_CHARS - len(marker))
        assert find_chapter_label(html, len(html)) == "PRVÁ ČASŤ"


class TestParseProvisions:
    def test_minimal_predpis_round_trip(self):
        block = (
            PREDPIS_OPEN
            + '<div class="castOznacenie">PRVÁ ČASŤ</div>'
            + _paragraf(1, _odsek("(1)", "Prvý riadok.") + '<div class="odsek"><div class="text">Druhý riadok.</div></div>')
            + "</div>"
        )
        provisions = parse_provisions(block)
        assert len(provisions) == 1
        assert provisions[0].chapter == "PRVÁ ČASŤ"
        assert provisions[0].content.split("\n") == ["(1) Prvý riadok.", "Druhý riadok."]

    def test_missing_label_synthesized_from_anchor(self):
        block = PREDPIS_OPEN + _paragraf("12", _odsek("", "Obsah dvanásteho paragrafu."), label="")
        provisions = parse_provisions(block)
        assert provisions[0].provision_ref == "§12"
        assert provisions[0].section == "12"
        assert provisions[0].title == "§12"

    def test_short_placeholders_discarded(self):
        block = PREDPIS_OPEN + _paragraf(1, '<div class="text">—</div>') + _paragraf(2, _odsek("", "Skutočný obsah."))
        provisions = parse_provisions(block)
        assert [p.provision_ref for p in provisions] == ["§2"]

    def test_no_provisions(self):
        assert parse_provisions(PREDPIS_OPEN + "<p>Úvod</p></div>") == []


class TestParseActFromVersionPage:
    @pytest.fixture
    def act(self):
        law = get_target_law("act-18-2018")
        return parse_act_from_version_page(VERSION_HTML, law, DocumentStatus.IN_FORCE, in_force_date="2018-05-25")

    def test_metadata(self, act):
        assert act.id == "act-18-2018"
        assert act.type == "statute"
        assert act.title == (
            "Zákon č. 18/2018 Z. z. o ochrane osobných údajov a o zmene a doplnení niektorých zákonov"
        )
        assert act.title_en == "Act No. 18/2018 Coll. on Personal Data Protection"
        assert act.status == DocumentStatus.IN_FORCE
        assert act.issued_date == "2017-11-29"
        assert act.in_force_date == "2018-05-25"
        assert act.url == "https://www.slov-lex.sk/ezbierky/pravne-predpisy/SK/ZZ/2018/18/"

    def test_provisions_in_document_order(self, act):
        assert [p.provision_ref for p in act.provisions] == ["§1", "§2", "§5a"]

    def test_notes_section_excluded(self, act):
        assert all(p.provision_ref != "§99" for p in act.provisions)

    def test_section_and_title(self, act):
        first, _, third = act.provisions
        assert first.section == "1"
        assert first.title == "Predmet úpravy"
        assert third.section == "5a"
        assert third.title == "§5a"

    def test_chapter_labels(self, act):
        first, second, third = act.provisions
        assert first.chapter == "PRVÁ ČASŤ ZÁKLADNÉ USTANOVENIA"
        assert second.chapter == "PRVÁ ČASŤ ZÁKLADNÉ USTANOVENIA"
        assert third.chapter == "DRUHÁ ČASŤ / PRVÁ HLAVA ZÁSADY SPRACÚVANIA"

    def test_footnote_markers_removed_from_content(self, act):
        third = act.provisions[2]
        assert third.content == (
            "(1) Osobné údaje musia byť spracúvané zákonným spôsobom.\n"
            "(2) Prevádzkovateľ je zodpovedný za dodržiavanie odseku 1."
        )

    def test_definitions_mined(self, act):
        assert [(d.term, d.source_provision) for d in act.definitions] == [
            ("osobnými údajmi údaje týkajúce sa identifikovanej fyzickej osoby", "§2"),
            ("dotknutou osobou každá fyzická osoba", "§2"),
        ]

    def test_title_falls_back_to_citation(self):
        law = get_target_law("act-69-2018")
        html = f"<html><body>{PREDPIS_OPEN}{_paragraf(1, _odsek('', 'Obsah paragrafu.'))}</div></body></html>"
        act = parse_act_from_version_page(html, law, DocumentStatus.NOT_YET_IN_FORCE)
        assert act.title == "Zákon č. 69/2018 Z. z."
        assert act.issued_date is None
        assert act.in_force_date is None

    def test_missing_root_raises(self):
        law = get_target_law("act-18-2018")
        with pytest.raises(StructureError):
            parse_act_from_version_page("<html><h1>18/2018 Z. z.</h1></html>", law, DocumentStatus.IN_FORCE)
