"""Tests for text and date normalization helpers."""

from slovlex.utils import (
    SLOVAK_MONTHS,
    clean_fragment,
    decode_entities,
    normalize_whitespace,
    parse_localized_date,
    strip_tags,
)


class TestDecodeEntities:
    def test_common_named_entities(self):
        assert decode_entities("a&nbsp;b") == "a b"
        assert decode_entities("R&amp;D") == "R&D"
        assert decode_entities("&quot;x&quot;") == '"x"'
        assert decode_entities("&lt;div&gt;") == "<div>"

    def test_dashes_and_ellipsis_fold_to_ascii(self):
        assert decode_entities("1&ndash;3") == "1-3"
        assert decode_entities("a&mdash;b") == "a-b"
        assert decode_entities("atď&hellip;") == "atď..."

    def test_numeric_entities(self):
        assert decode_entities("&#167; 5") == "§ 5"
        assert decode_entities("&#x00A7; 5") == "§ 5"
        assert decode_entities("&#39;a&#39;") == "'a'"

    def test_plain_text_unchanged(self):
        assert decode_entities("Zákon č. 18/2018 Z. z.") == "Zákon č. 18/2018 Z. z."


class TestStripTags:
    def test_br_becomes_newline(self):
        assert strip_tags("a<br>b<br/>c<BR />d") == "a\nb\nc\nd"

    def test_tags_become_spaces(self):
        assert strip_tags("<p>a</p><span>b</span>") == " a  b "

    def test_escaped_markup_survives(self):
        assert strip_tags("<b>x &lt;y&gt;</b>") == " x <y> "

    def test_non_breaking_space_collapsed(self):
        assert strip_tags("a\u00a0b") == "a b"


class TestNormalizeWhitespace:
    def test_collapses_and_trims(self):
        assert normalize_whitespace("  a \n\t b  ") == "a b"

    def test_empty(self):
        assert normalize_whitespace("   ") == ""


class TestCleanFragment:
    def test_citation_link_removed_before_stripping(self):
        html = 'osobné údaje<a class="citacnyOdkazJednoduchy" href="#poznamky.poznamka-1">1)</a> sa spracúvajú'
        assert clean_fragment(html) == "osobné údaje sa spracúvajú"

    def test_superscript_footnote_removed(self):
        assert clean_fragment("nariadenia<sup>2</sup>) v znení") == "nariadenia) v znení"

    def test_other_anchors_unwrapped_without_spaces(self):
        assert clean_fragment('podľa <a href="/SK/ZZ/2018/18/">§ 5</a>ods. 1') == "podľa § 5ods. 1"

    def test_result_is_single_line(self):
        assert clean_fragment("<div>prvý<br>druhý</div>") == "prvý druhý"

    def test_idempotent_on_clean_text(self):
        text = "(1) Tento zákon upravuje ochranu fyzických osôb."
        assert clean_fragment(text) == text
        assert clean_fragment(clean_fragment(text)) == text


class TestParseLocalizedDate:
    def test_unaccented_month(self):
        assert parse_localized_date("29. novembra 2017") == "2017-11-29"

    def test_accented_and_unaccented_variants_agree(self):
        assert parse_localized_date("1. mája 2018") == "2018-05-01"
        assert parse_localized_date("1. maja 2018") == "2018-05-01"
        assert parse_localized_date("5. októbra 2004") == parse_localized_date("5. oktobra 2004")

    def test_day_zero_padded(self):
        assert parse_localized_date("3. januára 2018") == "2018-01-03"

    def test_markup_and_case_tolerated(self):
        assert parse_localized_date("<div>zo 14. Decembra&nbsp;2021</div>") == "2021-12-14"

    def test_unknown_month(self):
        assert parse_localized_date("1. brumaire 2018") is None

    def test_no_date(self):
        assert parse_localized_date("bez dátumu") is None

    def test_month_table_covers_all_months(self):
        assert sorted(set(SLOVAK_MONTHS.values())) == [f"{m:02d}" for m in range(1, 13)]
