# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Closed vocabularies of the GenBank flat file format.
"""

__name__ = "flatseq.io.genbank"
__all__ = [
    "Vocabulary",
    "DIVISIONS",
    "TOP_LEVEL_KEYWORDS",
    "REFERENCE_KEYWORDS",
    "FEATURE_TYPES",
    "QUALIFIER_KEYS",
]


class Vocabulary:
    """
    An immutable set of known tokens.

    A token that is not part of the vocabulary is merely
    *unrecognized*: the parsers keep or skip it, but never fail on it.

    Parameters
    ----------
    name : str
        A descriptive name of the vocabulary.
    tokens : iterable object of str
        The known tokens.

    Examples
    --------

    >>> divisions = Vocabulary("divisions", ["PRI", "ROD"])
    >>> print("PRI" in divisions)
    True
    >>> print("CON" in divisions)
    False
    >>> print("CON" in divisions.extend("CON"))
    True
    """

    __slots__ = ("_name", "_tokens")

    def __init__(self, name, tokens):
        self._name = name
        self._tokens = frozenset(tokens)

    @property
    def name(self):
        return self._name

    def extend(self, *tokens):
        """
        Create a new vocabulary, that additionally contains the given
        tokens.

        Parameters
        ----------
        *tokens : str
            The tokens to be added.

        Returns
        -------
        vocabulary : Vocabulary
            The extended vocabulary.
        """
        return Vocabulary(self._name, self._tokens | frozenset(tokens))

    def __contains__(self, token):
        if not isinstance(token, str):
            return False
        return token.strip() in self._tokens

    def __iter__(self):
        return iter(sorted(self._tokens))

    def __len__(self):
        return len(self._tokens)

    def __eq__(self, item):
        if not isinstance(item, Vocabulary):
            return False
        return self._tokens == item._tokens

    def __hash__(self):
        return hash(self._tokens)

    def __repr__(self):
        return f"Vocabulary('{self._name}', {sorted(self._tokens)})"


DIVISIONS = Vocabulary("GenBank divisions", [
    "PRI",  # primate sequences
    "ROD",  # rodent sequences
    "MAM",  # other mammalian sequences
    "VRT",  # other vertebrate sequences
    "INV",  # invertebrate sequences
    "PLN",  # plant, fungal, and algal sequences
    "BCT",  # bacterial sequences
    "VRL",  # viral sequences
    "PHG",  # bacteriophage sequences
    "SYN",  # synthetic sequences
    "UNA",  # unannotated sequences
    "EST",  # EST sequences (expressed sequence tags)
    "PAT",  # patent sequences
    "STS",  # STS sequences (sequence tagged sites)
    "GSS",  # GSS sequences (genome survey sequences)
    "HTG",  # HTG sequences (high-throughput genomic sequences)
    "HTC",  # unfinished high-throughput cDNA sequencing
    "ENV",  # environmental sampling sequences
])

TOP_LEVEL_KEYWORDS = Vocabulary("top-level keywords", [
    "LOCUS",
    "DEFINITION",
    "ACCESSION",
    "VERSION",
    "KEYWORDS",
    "SOURCE",
    "REFERENCE",
    "PRIMARY",
    "FEATURES",
    "ORIGIN",
])

# Subfields of a 'REFERENCE' field
REFERENCE_KEYWORDS = Vocabulary("reference keywords", [
    "AUTHORS",
    "TITLE",
    "JOURNAL",
    "PUBMED",
    "REMARK",
])

FEATURE_TYPES = Vocabulary("feature types", [
    "assembly_gap",
    "C_region",
    "CDS",
    "centromere",
    "D-loop",
    "D_segment",
    "exon",
    "gap",
    "gene",
    "iDNA",
    "intron",
    "J_segment",
    "mat_peptide",
    "misc_binding",
    "misc_difference",
    "misc_feature",
    "misc_recomb",
    "misc_RNA",
    "misc_structure",
    "mobile_element",
    "modified_base",
    "mRNA",
    "ncRNA",
    "N_region",
    "old_sequence",
    "operon",
    "oriT",
    "polyA_site",
    "precursor_RNA",
    "prim_transcript",
    "primer_bind",
    "propeptide",
    "protein_bind",
    "regulatory",
    "repeat_region",
    "rep_origin",
    "rRNA",
    "S_region",
    "sig_peptide",
    "source",
    "stem_loop",
    "STS",
    "telomere",
    "tmRNA",
    "transit_peptide",
    "tRNA",
    "unsure",
    "V_region",
    "V_segment",
    "variation",
    "3'UTR",
    "5'UTR",
])

# Qualifier keys without the leading '/' and the trailing '='
QUALIFIER_KEYS = Vocabulary("qualifier keys", [
    "allele",
    "altitude",
    "anticodon",
    "artificial_location",
    "bio_material",
    "bound_moiety",
    "cell_line",
    "cell_type",
    "chromosome",
    "citation",
    "clone",
    "clone_lib",
    "codon_start",
    "collected_by",
    "collection_date",
    "compare",
    "country",
    "cultivar",
    "culture_collection",
    "db_xref",
    "dev_stage",
    "direction",
    "EC_number",
    "ecotype",
    "environmental_sample",
    "estimated_length",
    "exception",
    "experiment",
    "focus",
    "frequency",
    "function",
    "gap_type",
    "gene",
    "gene_synonym",
    "germline",
    "haplogroup",
    "haplotype",
    "host",
    "identified_by",
    "inference",
    "isolate",
    "isolation_source",
    "lab_host",
    "lat_lon",
    "linkage_evidence",
    "locus_tag",
    "macronuclear",
    "map",
    "mating_type",
    "metagenome_source",
    "mobile_element_type",
    "mod_base",
    "mol_type",
    "ncRNA_class",
    "note",
    "number",
    "old_locus_tag",
    "operon",
    "organelle",
    "organism",
    "partial",
    "PCR_conditions",
    "PCR_primers",
    "phenotype",
    "plasmid",
    "pop_variant",
    "product",
    "protein_id",
    "proviral",
    "pseudo",
    "pseudogene",
    "rearranged",
    "replace",
    "ribosomal_slippage",
    "rpt_family",
    "rpt_type",
    "rpt_unit_range",
    "rpt_unit_seq",
    "satellite",
    "segment",
    "serotype",
    "serovar",
    "sex",
    "specimen_voucher",
    "standard_name",
    "strain",
    "sub_clone",
    "submitter_seqid",
    "sub_species",
    "sub_strain",
    "tag_peptide",
    "tissue_lib",
    "tissue_type",
    "transgenic",
    "translation",
    "transl_except",
    "transl_table",
    "trans_splicing",
    "type_material",
    "variety",
])
