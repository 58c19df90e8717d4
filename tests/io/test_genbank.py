# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import warnings
from os.path import join
from tempfile import TemporaryFile
import pytest
import flatseq
import flatseq.io.genbank as gb
from ..util import data_dir


MINIMAL_RECORD = """\
LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020
FEATURES             Location/Qualifiers
     gene            1..10
                     /gene="x"
ORIGIN
        1 atgcatgcat
//
"""


@pytest.fixture
def avidin():
    gb_file = gb.GenBankFile.read(join(data_dir("io"), "avidin.gb"))
    return gb.get_annotated_sequence(gb_file)


@pytest.mark.parametrize("line, exp_class", [
    ("LOCUS       test", gb.LineClass.TOP_LEVEL),
    ("//", gb.LineClass.TOP_LEVEL),
    ("  AUTHORS   Doe,J.", gb.LineClass.SUB_LEVEL),
    ("   PUBMED   7665080", gb.LineClass.SUB_LEVEL),
    ("     gene            1..10", gb.LineClass.SUB_LEVEL),
    ('                     /gene="x"', gb.LineClass.QUALIFIER),
    ("                     GAVNSRGEFTG", gb.LineClass.QUALIFIER_CONTINUATION),
    ("            complete genome.", gb.LineClass.QUALIFIER_CONTINUATION),
    ("            Eukaryota; Metazoa;", gb.LineClass.PLAIN_CONTINUATION),
    ("            record.", gb.LineClass.PLAIN_CONTINUATION),
    ("", gb.LineClass.PLAIN_CONTINUATION),
    ("     ", gb.LineClass.PLAIN_CONTINUATION),
])
def test_classify_line(line, exp_class):
    """
    Check the classification of typical lines, including lines that are
    too short for the qualifier columns.
    """
    assert gb.classify_line(line) == exp_class


def test_classify_custom_layout():
    """
    Check whether the column positions can be adjusted.
    """
    layout = gb.ColumnLayout(sub_level=2)
    assert gb.classify_line("  AUTHORS", layout) == gb.LineClass.SUB_LEVEL
    assert gb.classify_line("   AUTHORS") == gb.LineClass.SUB_LEVEL
    assert gb.classify_line("   AUTHORS", layout) \
        == gb.LineClass.PLAIN_CONTINUATION


def test_line_cursor():
    """
    Check navigation with a :class:`LineCursor`.
    """
    cursor = gb.LineCursor(["LOCUS       a", "  AUTHORS   b"])
    assert cursor.position == 0
    assert cursor.line_number == 1
    assert cursor.peek(1) == "  AUTHORS   b"
    assert cursor.peek(2) is None
    assert cursor.classify(1) == gb.LineClass.SUB_LEVEL
    assert cursor.advance() == "LOCUS       a"
    assert cursor.consume_remaining() == ["  AUTHORS   b"]
    assert cursor.at_end()
    assert cursor.classify() is None
    assert cursor.head() == ""
    with pytest.raises(IndexError):
        cursor.advance()


def test_line_cursor_rest_is_blank():
    cursor = gb.LineCursor(["//", "", "   "])
    assert not cursor.rest_is_blank()
    cursor.advance()
    assert cursor.rest_is_blank()
    cursor.consume_remaining()
    assert cursor.rest_is_blank()


def test_join_continuation():
    """
    Continuation lines are trimmed and joined by a single space.
    The joiner stops at the next field or subfield.
    """
    cursor = gb.LineCursor([
        "            gene and its relationship",
        "               with avidin-related genes",
        "  JOURNAL   Gene 161",
    ])
    tokens = "TITLE     Cloning and sequencing".split(" ")
    text = gb.join_continuation(tokens, cursor)
    assert text == (
        "Cloning and sequencing gene and its relationship "
        "with avidin-related genes"
    )
    assert cursor.head() == "JOURNAL"


def test_join_continuation_end_of_lines():
    cursor = gb.LineCursor([])
    assert gb.join_continuation(["KEYWORDS", "", "", "."], cursor) == "."


@pytest.mark.parametrize("line, exp_locus", [
    (
        "LOCUS       AJ311647                 120 bp    DNA     linear   VRT 14-NOV-2006",
        flatseq.Locus("AJ311647", "120 bp", "DNA", "VRT", "14-NOV-2006", False)
    ),
    (
        "LOCUS       pUC19c      2686 bp    DNA     circular SYN 06-JUN-2016",
        flatseq.Locus("pUC19c", "2686 bp", "DNA", "SYN", "06-JUN-2016", True)
    ),
    (
        "LOCUS       CAA00001                 147 aa            linear   VRT 14-NOV-2006",
        flatseq.Locus("CAA00001", "147 aa", "", "VRT", "14-NOV-2006", False)
    ),
    (
        "LOCUS       X1          10 bp    mRNA    PRI 01-JAN-2020",
        flatseq.Locus("X1", "10 bp", "mRNA", "PRI", "01-JAN-2020", False)
    ),
])
def test_parse_locus(line, exp_locus):
    """
    Check whether the topology is optional and whether a missing
    molecule type is detected.
    """
    assert gb.parse_locus(line) == exp_locus


@pytest.mark.parametrize("line", [
    "LOCUS       test  10 bp",
    "LOCUS       test  10 bp    DNA     circular SYN",
])
def test_parse_malformed_locus(line):
    with pytest.raises(flatseq.MalformedLocusError):
        gb.parse_locus(line, line_number=1)


def test_parse_locus_unknown_division():
    """
    An unknown division is kept, but reported.
    """
    with pytest.warns(UserWarning, match="XYZ"):
        locus = gb.parse_locus(
            "LOCUS       test  10 bp    DNA     linear   XYZ 01-JAN-2020"
        )
    assert locus.genbank_division == "XYZ"
    # A custom vocabulary accepts the division
    divisions = gb.DIVISIONS.extend("XYZ")
    locus = gb.parse_locus(
        "LOCUS       test  10 bp    DNA     linear   XYZ 01-JAN-2020",
        divisions
    )
    assert locus.genbank_division == "XYZ"


def test_parse_reference():
    cursor = gb.LineCursor([
        "REFERENCE   2  (bases 1 to 120)",
        "  AUTHORS   Wallen,M.J.",
        "  TITLE     Direct Submission",
        "  CONSRTM   Some consortium",
        "            spanning two lines",
        "  JOURNAL   Submitted (09-MAR-2001) Wallen M.J., Department",
        "            of Biological and Environmental Science",
        "   PUBMED   7665080",
        "  REMARK    Erratum",
        "FEATURES             Location/Qualifiers",
    ])
    reference = gb.parse_reference(cursor)
    assert reference == flatseq.Reference(
        index="2",
        authors="Wallen,M.J.",
        title="Direct Submission",
        journal=(
            "Submitted (09-MAR-2001) Wallen M.J., Department "
            "of Biological and Environmental Science"
        ),
        pubmed="7665080",
        remark="Erratum",
        range="(bases 1 to 120)",
    )
    # The unknown 'CONSRTM' subfield is skipped completely
    assert cursor.head() == "FEATURES"


def test_parse_source():
    cursor = gb.LineCursor([
        "SOURCE      Gallus gallus (chicken)",
        "  ORGANISM  Gallus gallus",
        "            Eukaryota; Metazoa;",
        "            Aves.",
        "REFERENCE   1",
    ])
    source, organism = gb.parse_source(cursor)
    assert source == "Gallus gallus (chicken)"
    assert organism == "Gallus gallus Eukaryota; Metazoa; Aves."
    assert cursor.head() == "REFERENCE"


def test_parse_source_without_organism():
    cursor = gb.LineCursor([
        "SOURCE      synthetic construct",
        "            with a second line",
        "FEATURES             Location/Qualifiers",
    ])
    source, organism = gb.parse_source(cursor)
    assert source == "synthetic construct with a second line"
    assert organism == ""
    assert cursor.head() == "FEATURES"


def test_parse_primary():
    gb_file = gb.GenBankFile.read(join(data_dir("io"), "tpa.gb"))
    annot_seq = gb.get_annotated_sequence(gb_file)
    assert annot_seq.meta.primaries == [
        flatseq.Primary("1-30", "AC000001.1", "101-130", ""),
        flatseq.Primary("31-60", "AC000002.1", "1-30", "c"),
    ]
    assert annot_seq.meta.keywords == "Third Party Data; TPA."
    assert len(annot_seq.sequence) == 60


def test_parse_primary_invalid_row():
    cursor = gb.LineCursor([
        "PRIMARY     TPA_SPAN            PRIMARY_IDENTIFIER PRIMARY_SPAN",
        "            1-30                AC000001.1",
    ])
    with pytest.raises(flatseq.InvalidFileError) as excinfo:
        gb.parse_primary(cursor)
    assert excinfo.value.line_number == 2


def test_parse_features():
    """
    Check boolean qualifiers, quote stripping, qualifier continuation,
    repeated qualifiers and wrapped locations.
    """
    cursor = gb.LineCursor([
        "     CDS             join(1..27,61..90,",
        "                     101..120)",
        '                     /gene="AVD"',
        '                     /note="first"',
        '                     /note="second"',
        '                     /translation="MVHAT',
        '                     SPLLL"',
        "                     /pseudo",
        "     unknown_type    complement(<5..>20)",
        "                     /made_up_key=1",
        "ORIGIN",
    ])
    features = gb.parse_features(cursor, "AJ311647")
    assert len(features) == 2

    cds, other = features
    assert cds.name == "AJ311647"
    assert cds.type == "CDS"
    assert cds.location == "join(1..27,61..90,101..120)"
    assert (cds.start, cds.end, cds.strand) == (1, 120, "+")
    assert cds.attributes == {
        "gene": "AVD",
        # The later value wins
        "note": "second",
        # Continuation lines are appended without separator
        "translation": "MVHATSPLLL",
        "pseudo": "",
    }
    # Unrecognized tokens are kept
    assert other.type == "unknown_type"
    assert (other.start, other.end, other.strand) == (5, 20, "-")
    assert other.attributes == {"made_up_key": "1"}
    assert gb.get_unrecognized(cds) == []
    assert gb.get_unrecognized(other) == ["unknown_type", "made_up_key"]

    assert cursor.head() == "ORIGIN"


def test_parse_features_short_declaration():
    cursor = gb.LineCursor([
        "     gene",
        '                     /gene="x"',
    ])
    with pytest.raises(flatseq.InvalidFileError) as excinfo:
        gb.parse_features(cursor)
    assert excinfo.value.line_number == 1


def test_parse_features_remote_location():
    """
    Locations referring to other records have unknown bounds, but the
    feature is kept.
    """
    cursor = gb.LineCursor(["     gene            J00194.1:100..202"])
    with pytest.warns(UserWarning):
        features = gb.parse_features(cursor)
    assert features[0].location == "J00194.1:100..202"
    assert (features[0].start, features[0].end) == (0, 0)


@pytest.mark.parametrize("location, exp_bounds", [
    ("1..10", (1, 10, "+")),
    ("<1..>10", (1, 10, "+")),
    ("467", (467, 467, "+")),
    ("102.110", (102, 110, "+")),
    ("123^124", (123, 124, "+")),
    ("complement(34..126)", (34, 126, "-")),
    ("complement(join(2691..4571,4918..5163))", (2691, 5163, "-")),
    ("join(complement(4918..5163),complement(2691..4571))", (2691, 5163, "-")),
    ("order(1..10,complement(20..30))", (1, 30, "")),
])
def test_get_location_bounds(location, exp_bounds):
    assert gb.get_location_bounds(location) == exp_bounds


def test_extract_sequence():
    """
    Only letters remain, their case is preserved.
    """
    assert gb.extract_sequence(["1 atgcatgc 60"]).sequence == "atgcatgc"
    assert gb.extract_sequence(["  1 acgT NNN", "61 aC"]).sequence \
        == "acgTNNNaC"
    assert gb.extract_sequence([]) == flatseq.Sequence()


def test_minimal_record():
    gb_file = gb.GenBankFile.from_string(MINIMAL_RECORD)
    annot_seq = gb.get_annotated_sequence(gb_file)
    assert annot_seq.meta.locus.name == "test"
    assert annot_seq.meta.name == "test"
    assert annot_seq.meta.size == 10
    assert len(annot_seq.features) == 1
    feature = annot_seq.features[0]
    assert feature.type == "gene"
    assert feature.attributes == {"gene": "x"}
    assert (feature.start, feature.end) == (1, 10)
    assert annot_seq.sequence.sequence == "atgcatgcat"


def test_metadata(avidin):
    meta = avidin.meta
    assert meta.locus == flatseq.Locus(
        "AJ311647", "120 bp", "DNA", "VRT", "14-NOV-2006", False
    )
    assert meta.name == "AJ311647"
    assert meta.size == 120
    assert meta.type == "DNA"
    assert meta.genbank_division == "VRT"
    assert meta.date == "14-NOV-2006"
    assert meta.definition == "Gallus gallus AVD gene for avidin, exons 1-4."
    assert meta.accession == "AJ311647"
    assert meta.version == "AJ311647.1"
    assert meta.keywords == "AVD gene; avidin."
    assert meta.source == "Gallus gallus (chicken)"
    assert meta.organism.startswith("Gallus gallus Eukaryota; Metazoa;")
    assert meta.organism.endswith("Phasianidae; Phasianinae; Gallus.")


def test_references(avidin):
    references = avidin.meta.references
    assert [ref.index for ref in references] == ["1", "2"]
    assert references[0].range == ""
    assert references[0].authors \
        == "Wallen,M.J., Laukkanen,M.O. and Kulomaa,M.S."
    assert references[0].title == (
        "Cloning and sequencing of the chicken egg-white avidin-encoding "
        "gene and its relationship with the avidin-related genes Avr1-Avr5"
    )
    assert references[0].journal == "Gene 161 (2), 205-209 (1995)"
    assert references[0].pubmed == "7665080"
    assert references[1].range == "(bases 1 to 120)"
    assert references[1].journal.endswith("University of Jyvaskyla, Finland")


def test_features(avidin):
    features = avidin.features
    assert [f.type for f in features] == ["source", "gene", "CDS", "exon"]
    assert all(f.name == "AJ311647" for f in features)

    source = features[0]
    assert source.attributes == {
        "organism": "Gallus gallus",
        "mol_type": "genomic DNA",
        "db_xref": "taxon:9031",
    }

    cds = features[2]
    assert cds.location == "join(1..27,61..90,101..120)"
    assert (cds.start, cds.end, cds.strand) == (1, 120, "+")
    assert cds.attributes["translation"] == (
        "MVHATSPLLLLLLLSLALVAPGLSARKCSLTGKWTNDLGSNMTI"
        "GAVNSRGEFTGTYITAVTATSNEIKESPLHGTQNTINKRTQPTFGFTVNWKFSESTTV"
        "FTGQCFIDRNGKEVLKTMWLLRSSVNDIGDDWKATRVGINIFTRLRTQKE"
    )

    exon = features[3]
    assert (exon.start, exon.end, exon.strand) == (1, 27, "-")
    assert exon.attributes == {"gene": "AVD", "number": "1", "pseudo": ""}


def test_sequence(avidin):
    sequence = avidin.sequence.sequence
    assert len(sequence) == 120
    assert sequence.startswith("atggtgcacgcaacctcccc")
    assert sequence.endswith("ggaccaacgatgggagcaac")
    assert avidin.sequence.description == ""


def test_no_keywords_after_origin():
    """
    Sequence lines are never interpreted as fields, even if they look
    like one.
    """
    gb_file = gb.GenBankFile.from_string(
        "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\n"
        "ORIGIN\n"
        "        1 atgcatgcat\n"
        "FEATURES             Location/Qualifiers\n"
        "     gene            1..10\n"
        "DEFINITION  Not a definition\n"
    )
    annot_seq = gb.get_annotated_sequence(gb_file)
    assert annot_seq.features == []
    assert annot_seq.meta.definition == ""
    assert annot_seq.sequence.sequence \
        == "atgcatgcatFEATURESLocationQualifiersgeneDEFINITIONNotadefinition"


def test_fields_after_terminator_ignored():
    gb_file = gb.GenBankFile.from_string(
        "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\n"
        "//\n"
        "DEFINITION  Belongs to no record\n"
    )
    annot_seq = gb.get_annotated_sequence(gb_file)
    assert annot_seq.meta.definition == ""


def test_truncated_block():
    """
    A block cut by the end of the input is kept with a warning, or
    rejected in strict mode.
    """
    text = (
        "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\n"
        "FEATURES             Location/Qualifiers\n"
        "     gene            1..10\n"
        '                     /gene="x"\n'
    )
    gb_file = gb.GenBankFile.from_string(text)
    with pytest.warns(UserWarning, match="FEATURES"):
        annot_seq = gb.get_annotated_sequence(gb_file)
    assert len(annot_seq.features) == 1
    assert annot_seq.sequence.sequence == ""

    with pytest.raises(flatseq.TruncatedBlockError) as excinfo:
        gb.get_annotated_sequence(gb_file, strict=True)
    assert excinfo.value.line_number == 2


def test_truncated_block_trailing_blank_lines():
    """
    Blank lines after a block do not terminate it.
    """
    text = (
        "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\n"
        "FEATURES             Location/Qualifiers\n"
        "     gene            1..10\n"
        '                     /gene="x"\n'
        "\n"
        "   \n"
    )
    gb_file = gb.GenBankFile.from_string(text)
    with pytest.warns(UserWarning, match="FEATURES"):
        annot_seq = gb.get_annotated_sequence(gb_file)
    assert len(annot_seq.features) == 1

    with pytest.raises(flatseq.TruncatedBlockError) as excinfo:
        gb.get_annotated_sequence(gb_file, strict=True)
    assert excinfo.value.line_number == 2


def test_truncated_source():
    text = (
        "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\n"
        "SOURCE      Gallus gallus (chicken)\n"
        "  ORGANISM  Gallus gallus\n"
        "            Eukaryota; Aves.\n"
    )
    gb_file = gb.GenBankFile.from_string(text)
    with pytest.warns(UserWarning, match="Line 2: The 'SOURCE' field"):
        annot_seq = gb.get_annotated_sequence(gb_file)
    assert annot_seq.meta.source == "Gallus gallus (chicken)"
    assert annot_seq.meta.organism == "Gallus gallus Eukaryota; Aves."

    with pytest.raises(flatseq.TruncatedBlockError) as excinfo:
        gb.get_annotated_sequence(gb_file, strict=True)
    assert excinfo.value.line_number == 2


@pytest.mark.parametrize("strict", [False, True])
def test_blank_line_between_features(strict):
    """
    Blank lines in the feature table do not end it.
    """
    gb_file = gb.GenBankFile.from_string(
        "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\n"
        "FEATURES             Location/Qualifiers\n"
        "     gene            1..10\n"
        '                     /gene="x"\n'
        "\n"
        "     CDS             1..9\n"
        '                     /gene="x"\n'
        "\n"
        "ORIGIN\n"
        "        1 atgcatgcat\n"
        "//\n"
    )
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        annot_seq = gb.get_annotated_sequence(gb_file, strict=strict)
    assert [f.type for f in annot_seq.features] == ["gene", "CDS"]
    assert (annot_seq.features[1].start, annot_seq.features[1].end) == (1, 9)
    assert annot_seq.sequence.sequence == "atgcatgcat"


def test_unexpected_feature_line():
    """
    A line in the feature table, that does not belong to a feature, is
    skipped with a warning, or rejected in strict mode.
    The following features are still parsed.
    """
    gb_file = gb.GenBankFile.from_string(
        "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\n"
        "FEATURES             Location/Qualifiers\n"
        "     gene            1..10\n"
        "          stray text\n"
        "     CDS             1..9\n"
        "ORIGIN\n"
        "        1 atgcatgcat\n"
        "//\n"
    )
    with pytest.warns(UserWarning, match="Line 4: Unexpected line"):
        annot_seq = gb.get_annotated_sequence(gb_file)
    assert [f.type for f in annot_seq.features] == ["gene", "CDS"]

    with pytest.raises(flatseq.InvalidFileError) as excinfo:
        gb.get_annotated_sequence(gb_file, strict=True)
    assert excinfo.value.line_number == 4


def test_empty_file():
    """
    An empty input is not an error, but gives an empty model.
    """
    annot_seq = gb.get_annotated_sequence(gb.GenBankFile.from_string(""))
    assert annot_seq == flatseq.AnnotatedSequence()
    assert annot_seq.meta.locus is None


def test_missing_file():
    """
    Failures of the underlying input are not hidden behind an empty
    model.
    """
    with pytest.raises(OSError):
        gb.GenBankFile.read(join(data_dir("io"), "does_not_exist.gb"))


def test_binary_file_object():
    with TemporaryFile("wb+") as file:
        with pytest.raises(TypeError):
            gb.GenBankFile.read(file)


def test_independent_results():
    """
    Each call creates a new model.
    """
    gb_file = gb.GenBankFile.from_string(MINIMAL_RECORD)
    annot_seq1 = gb.get_annotated_sequence(gb_file)
    annot_seq2 = gb.get_annotated_sequence(gb_file)
    annot_seq1.features.clear()
    annot_seq1.meta.references.append(flatseq.Reference())
    assert len(annot_seq2.features) == 1
    assert annot_seq2.meta.references == []


def test_blocks():
    """
    Check the low-level block interface.
    """
    gb_file = gb.GenBankFile.from_string(MINIMAL_RECORD)
    blocks = list(gb.iter_blocks(gb_file.lines))
    assert [block.name for block in blocks] == ["LOCUS", "FEATURES", "ORIGIN"]
    assert [block.line_number for block in blocks] == [1, 2, 5]
    annot_seq = gb.fold_blocks(blocks)
    assert annot_seq == gb.get_annotated_sequence(gb_file)

    with pytest.raises(ValueError):
        gb.fold_blocks([gb.Block("COMMENT", "text", 1)])


def test_multi_file():
    multi_file = gb.MultiFile.read(join(data_dir("io"), "multi.gb"))
    annot_seqs = [gb.get_annotated_sequence(f) for f in multi_file]
    assert [a.meta.name for a in annot_seqs] == ["first", "second"]
    assert annot_seqs[0].meta.locus.circular
    assert annot_seqs[0].meta.definition == "The first record."
    assert annot_seqs[1].meta.type == ""
    assert annot_seqs[1].meta.genbank_division == "BCT"
    assert annot_seqs[1].features[0].attributes == {"product": "b"}
    assert annot_seqs[1].sequence.sequence == "MKVLAAGI"


def test_multi_file_without_last_terminator():
    multi_file = gb.MultiFile.from_string(
        MINIMAL_RECORD + MINIMAL_RECORD.replace("//\n", "")
    )
    assert len(list(multi_file)) == 2
