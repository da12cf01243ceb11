#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the to_jats conversion pipeline."""

import logging
from io import BytesIO, StringIO

import defusedxml.ElementTree as ET
import pytest
from utils import pandoc_json, pandoc_str

from ast2jats import JatsRendererOptions, to_jats
from ast2jats.ast import Document, Paragraph, Str
from ast2jats.exceptions import ParsingError

XLINK = "{http://www.w3.org/1999/xlink}"


def parse_xml(text: str):
    """Parse a rendered article, failing the test if it is not well formed."""
    return ET.fromstring(text.encode("utf-8"))


def paper_json() -> bytes:
    """A small paper with a section, a note, a citation, a figure and references."""
    return pandoc_json(
        [
            {"t": "Header", "c": [1, ["intro", [], []], pandoc_str("Introduction")]},
            {
                "t": "Para",
                "c": pandoc_str("Cells divide")
                + [
                    {"t": "Space"},
                    {
                        "t": "Cite",
                        "c": [
                            [{"citationId": "doe2020", "citationPrefix": [], "citationSuffix": []}],
                            pandoc_str("(Doe 2020)"),
                        ],
                    },
                    {"t": "Note", "c": [{"t": "Para", "c": pandoc_str("A footnote.")}]},
                ],
            },
            {
                "t": "Para",
                "c": [
                    {
                        "t": "Image",
                        "c": [
                            ["", [], []],
                            [{"t": "Strong", "c": pandoc_str("Figure 1.")}, {"t": "Space"}] + pandoc_str("A cell."),
                            ["cell.png", "fig:"],
                        ],
                    }
                ],
            },
            {"t": "Header", "c": [1, ["references", [], []], pandoc_str("References")]},
            {
                "t": "Div",
                "c": [
                    ["refs", ["references"], []],
                    [
                        {"t": "Para", "c": pandoc_str("Doe J. Cells. 2020.")},
                        {"t": "Para", "c": pandoc_str("Roe J. Tissues. 2021.")},
                    ],
                ],
            },
        ],
        meta={
            "title": {"t": "MetaInlines", "c": [{"t": "Emph", "c": pandoc_str("Cells")}]},
            "journal": {"t": "MetaMap", "c": {"title": {"t": "MetaString", "c": "J Things"}}},
        },
    )


@pytest.mark.integration
class TestBodyFragments:
    """Conversion without document assembly."""

    def test_header_and_paragraph(self, intro_document):
        """A header closes the implicit section and opens a titled one."""
        result = to_jats(intro_document, standalone=False)
        assert result == "</sec>\n<sec>\n<title>Intro</title>\n\n<p>Hi</p>"

    def test_kwargs_override_options_object(self, intro_document):
        """Keyword options win over the options object."""
        options = JatsRendererOptions(standalone=True, block_separator="\n")
        result = to_jats(intro_document, renderer_options=options, standalone=False)
        assert result == "</sec>\n<sec>\n<title>Intro</title>\n<p>Hi</p>"

    def test_parser_kwargs(self):
        """Parser fields are routed to the Pandoc JSON parser."""
        source = pandoc_json([{"t": "Para", "c": [{"t": "Image", "c": [["", [], []], [], ["a.png", "fig:"]]}]}])
        assert to_jats(source, standalone=False).startswith("<fig>")
        assert not to_jats(source, standalone=False, implicit_figures=False).startswith("<fig>")

    def test_unknown_kwargs_logged(self, intro_document, caplog):
        """Options that match no field are ignored with a warning."""
        with caplog.at_level(logging.WARNING, logger="ast2jats.api"):
            to_jats(intro_document, standalone=False, no_such_option=1)
        assert "no_such_option" in caplog.text


@pytest.mark.integration
class TestStandaloneArticles:
    """Conversion to complete JATS articles."""

    def test_intro_article_is_well_formed(self, intro_document, fixed_today, tmp_path, monkeypatch):
        """The packaged template yields a well-formed article."""
        monkeypatch.chdir(tmp_path)
        root = parse_xml(to_jats(intro_document, today=fixed_today))
        assert root.tag == "article"
        assert root.get("article-type") == "research-article"
        sections = root.findall("./body/sec")
        assert len(sections) == 2
        assert sections[1].findtext("title") == "Intro"
        assert sections[1].findtext("p") == "Hi"
        assert root.findtext("./front/article-meta/pub-date/year") == "2024"
        assert root.findtext("./front/article-meta/title-group/article-title") == "Other"

    def test_front_matter_from_metadata(self, intro_document, article_metadata, fixed_today, tmp_path, monkeypatch):
        """Metadata fills the journal and article front matter."""
        monkeypatch.chdir(tmp_path)
        root = parse_xml(to_jats(intro_document, metadata=article_metadata, today=fixed_today))

        journal = root.find("./front/journal-meta")
        assert journal.findtext("journal-title-group/journal-title") == "Journal of Things"
        assert journal.findtext("issn[@pub-type='ppub']") == "1234-5678"
        assert journal.findtext("issn[@pub-type='epub']") == ""
        assert journal.findtext("journal-id[@journal-id-type='publisher-id']") == "jot"

        meta = root.find("./front/article-meta")
        assert meta.findtext("title-group/article-title") == "Cells & Tissues"
        assert meta.findtext("article-id[@pub-id-type='doi']") == "10.1000/xyz"
        assert meta.find("article-id[@pub-id-type='art-access-id']") is not None
        assert meta.findtext("article-categories/subj-group/subject") == "Research"
        assert meta.findtext("elocation-id") == "10.1000/xyz"
        assert [name.text for name in meta.iter("string-name")] == ["Jane Doe", "John Roe"]

        pub_date = meta.find("pub-date")
        assert pub_date.get("iso-8601-date") == "2024-01-15"
        assert (pub_date.findtext("year"), pub_date.findtext("month"), pub_date.findtext("day")) == (
            "2024",
            "01",
            "15",
        )

        permissions = meta.find("permissions")
        assert permissions.findtext("copyright-statement") == "Copyright 2024"
        assert permissions.findtext("copyright-year") == "2024"
        assert permissions.findtext("copyright-holder") == "The Authors"

    def test_authors_given_as_mappings(self, intro_document, fixed_today, tmp_path, monkeypatch):
        """Authors with a name key are listed by name."""
        monkeypatch.chdir(tmp_path)
        metadata = {"author": [{"name": "Jane Doe", "affiliation": "Somewhere"}, "John Roe"]}
        root = parse_xml(to_jats(intro_document, metadata=metadata, today=fixed_today))
        assert [name.text for name in root.iter("string-name")] == ["Jane Doe", "John Roe"]

    def test_pandoc_json_paper(self, fixed_today, tmp_path, monkeypatch):
        """References move to the back matter and footnotes gather in a group."""
        monkeypatch.chdir(tmp_path)
        root = parse_xml(to_jats(paper_json(), today=fixed_today))

        assert root.find("./front/article-meta/title-group/article-title/italic").text == "Cells"
        assert root.findtext("./front/journal-meta/journal-title-group/journal-title") == "J Things"

        body = root.find("body")
        assert body.find(".//sec[@id='intro']") is not None
        assert body.find(".//xref[@ref-type='bibr']").text == "(Doe 2020)"
        assert body.find(".//fig/caption/title").text == "Figure 1."
        assert body.find(".//fig/graphic").get(f"{XLINK}href") == "cell.png"
        assert body.find(".//ref-list") is None

        back = root.find("back")
        ref_list = back.find("ref-list")
        assert ref_list.findtext("title") == "References"
        assert [ref.get("id") for ref in ref_list.findall("ref")] == ["ref-1", "ref-2"]
        assert ref_list.findtext("ref/mixed-citation") == "Doe J. Cells. 2020."

        footnotes = back.findall("fn-group/fn")
        assert [fn.get("id") for fn in footnotes] == ["fn1"]
        assert footnotes[0].find("p").text == "A footnote. "

    def test_sections_balanced_in_body(self, fixed_today, tmp_path, monkeypatch):
        """Nested headers produce a flat, balanced run of sections."""
        monkeypatch.chdir(tmp_path)
        source = pandoc_json(
            [
                {"t": "Header", "c": [1, ["", [], []], pandoc_str("A")]},
                {"t": "Header", "c": [2, ["", [], []], pandoc_str("B")]},
                {"t": "Para", "c": pandoc_str("text")},
            ]
        )
        root = parse_xml(to_jats(source, today=fixed_today))
        assert [sec.findtext("title") for sec in root.findall("./body/sec")] == ["", "A", "B"]


@pytest.mark.integration
class TestSourcesAndDestinations:
    """Inputs from files and streams, outputs to files and streams."""

    def test_json_file_to_file(self, tmp_path, fixed_today):
        """A Pandoc JSON file is converted and written to a path."""
        source = tmp_path / "paper.json"
        source.write_bytes(paper_json())
        target = tmp_path / "paper.xml"
        assert to_jats(source, output=target, today=fixed_today) is None
        parse_xml(target.read_text(encoding="utf-8"))

    def test_stream_to_stream(self, fixed_today):
        """Streams work on both ends."""
        output = StringIO()
        to_jats(BytesIO(paper_json()), output=output, standalone=False, today=fixed_today)
        assert "<ref-list>" in output.getvalue()

    def test_metadata_yaml_file_merged(self, intro_document, tmp_path, fixed_today):
        """A YAML metadata file merges over the document metadata."""
        document = Document(children=intro_document.children, metadata={"title": "Old", "journal": {"title": "J"}})
        meta_file = tmp_path / "meta.yaml"
        meta_file.write_text("title: New\njournal:\n  pissn: 1111-2222\n", encoding="utf-8")
        loader_dir = tmp_path / "tpl"
        loader_dir.mkdir()
        (loader_dir / "t.jats").write_text("$article_title$|$journal_title$|$journal_pissn$", encoding="utf-8")

        result = to_jats(
            document,
            metadata=meta_file,
            template_name="t.jats",
            template_search_paths=(str(loader_dir),),
            today=fixed_today,
        )
        assert result == "New|J|1111-2222"

    def test_custom_template_and_variables(self, intro_document, tmp_path, fixed_today):
        """Templates found on the search path see body, metadata and variables."""
        (tmp_path / "mini.jats").write_text(
            "<article>$if(note)$<note>$note$</note>$endif$<body>$body$</body></article>", encoding="utf-8"
        )
        result = to_jats(
            intro_document,
            template_name="mini.jats",
            template_search_paths=(str(tmp_path),),
            variables={"note": "draft"},
            today=fixed_today,
        )
        root = parse_xml(result)
        assert root.findtext("note") == "draft"
        assert [sec.findtext("title") for sec in root.findall("./body/sec")] == ["", "Intro"]

    def test_escaped_text_round_trips(self, tmp_path, fixed_today, monkeypatch):
        """Markup-significant characters in text stay well formed."""
        monkeypatch.chdir(tmp_path)
        document = Document(children=[Paragraph(content=[Str(content='a < b & "c" > d')])])
        root = parse_xml(to_jats(document, today=fixed_today))
        assert root.findtext("./body/sec/p") == 'a < b & "c" > d'

    def test_invalid_json(self):
        """Broken input surfaces as ParsingError."""
        with pytest.raises(ParsingError):
            to_jats(b"not json")
