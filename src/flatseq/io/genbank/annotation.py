# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Functions for parsing the feature table of a GenBank record.
"""

__name__ = "flatseq.io.genbank"
__all__ = ["parse_features", "get_location_bounds", "get_unrecognized"]

import re
import warnings
from ...annotation import Feature
from ...file import InvalidFileError
from .lines import LineClass
from .vocabulary import FEATURE_TYPES, QUALIFIER_KEYS

# Quotes and slashes are removed from qualifiers
_QUAL_STRIP = re.compile(r"[\"/\n]+")


def parse_features(cursor, name=""):
    """
    Parse the feature table of a GenBank record.

    A feature starts with a declaration line, containing the feature
    type and the location, followed by any number of qualifiers.
    Each qualifier starts with a ``/`` and may be continued on the
    following lines.
    Continuation lines of a qualifier are trimmed and appended without
    a separator.

    Blank lines between features are skipped.
    Parsing stops at the first other line that is neither a feature
    declaration nor part of a feature, in particular at the *ORIGIN*
    field, or at the end of the lines.

    Parameters
    ----------
    cursor : LineCursor
        A cursor positioned at the first line after the *FEATURES*
        line.
    name : str, optional
        The name of the record, that is set as :attr:`Feature.name`.

    Returns
    -------
    features : list of Feature
        The features in file order.

    Raises
    ------
    InvalidFileError
        If a feature declaration does not contain a type and a
        location.

    Examples
    --------

    >>> cursor = LineCursor([
    ...     "     gene            complement(1..10)",
    ...     '                     /gene="x"',
    ...     "                     /pseudo",
    ...     "ORIGIN",
    ... ])
    >>> feature = parse_features(cursor)[0]
    >>> print(feature.type, feature.location, feature.start, feature.end, feature.strand)
    gene complement(1..10) 1 10 -
    >>> print(feature.attributes)
    {'gene': 'x', 'pseudo': ''}
    >>> print(cursor.head())
    ORIGIN
    """
    features = []
    while not cursor.at_end():
        # A feature declaration is a 'SUB_LEVEL' line:
        # This stops the parser at 'ORIGIN', so that the sequence lines
        # are never interpreted as features
        if cursor.classify() != LineClass.SUB_LEVEL:
            if len(cursor.peek().strip()) == 0:
                cursor.advance()
                continue
            break
        line_number = cursor.line_number
        tokens = cursor.advance().split()
        if len(tokens) < 2:
            raise InvalidFileError(
                "Feature declaration requires a type and a location",
                line_number
            )
        feature_type = tokens[0]
        location = tokens[-1]
        # Long locations are wrapped into the following lines
        while cursor.classify() == LineClass.QUALIFIER_CONTINUATION:
            location += cursor.advance().strip()

        attributes = {}
        while cursor.classify() == LineClass.QUALIFIER:
            qualifier = cursor.advance()
            while cursor.classify() == LineClass.QUALIFIER_CONTINUATION:
                qualifier += cursor.advance().strip()
            key, value = _parse_qualifier(qualifier)
            # A repeated qualifier overwrites the previous value
            attributes[key] = value

        try:
            start, end, strand = get_location_bounds(location)
        except ValueError:
            warnings.warn(
                f"'{location}' is an unsupported location identifier, "
                f"the feature bounds are unknown",
                UserWarning
            )
            start, end, strand = 0, 0, ""

        features.append(Feature(
            name=name,
            type=feature_type,
            start=start,
            end=end,
            strand=strand,
            attributes=attributes,
            location=location,
        ))
    return features


def _parse_qualifier(qualifier):
    """
    Split a complete qualifier into key and value.
    Qualifiers without value, e.g. ``/pseudo``, get an empty value.
    """
    key, _, value = _QUAL_STRIP.sub("", qualifier).partition("=")
    return key.strip(), value.strip()


def get_location_bounds(location):
    """
    Get the outer bounds and the strand of a GenBank location.

    Parameters
    ----------
    location : str
        A location identifier, e.g. ``'complement(join(1..10,20..30))'``.

    Returns
    -------
    start, end : int
        The lowest and highest position covered by the location.
        Partial markers (``<``, ``>``) are ignored.
    strand : str
        ``'-'`` if the complete location is on the complementary strand,
        ``'+'`` if the complete location is on the forward strand and an
        empty string if both strands are involved.

    Raises
    ------
    ValueError
        If the location cannot be parsed, e.g. because it refers to
        another record.

    Examples
    --------

    >>> print(get_location_bounds("join(<1..100,complement(200..>300))"))
    (1, 300, '')
    >>> print(get_location_bounds("complement(5)"))
    (5, 5, '-')
    """
    locs = _parse_locs(location.strip(), False)
    start = min(first for first, _, _ in locs)
    end = max(last for _, last, _ in locs)
    reverse = set(is_reverse for _, _, is_reverse in locs)
    if reverse == {True}:
        strand = "-"
    elif reverse == {False}:
        strand = "+"
    else:
        strand = ""
    return start, end, strand


def _parse_locs(loc_str, is_reverse):
    if loc_str.startswith(("join", "order", "bond")):
        locs = []
        for part in _split_top_level(_inner(loc_str)):
            locs.extend(_parse_locs(part.strip(), is_reverse))
        return locs
    elif loc_str.startswith("complement"):
        return _parse_locs(_inner(loc_str).strip(), not is_reverse)
    else:
        first, last = _parse_single_loc(loc_str)
        return [(first, last, is_reverse)]


def _parse_single_loc(loc_str):
    if ".." in loc_str:
        first_str, last_str = loc_str.split("..")
    elif "^" in loc_str:
        first_str, last_str = loc_str.split("^")
    elif "." in loc_str:
        first_str, last_str = loc_str.split(".")
    else:
        first_str = last_str = loc_str
    first = int(first_str.lstrip("<>"))
    last = int(last_str.lstrip("<>"))
    if first > last:
        raise ValueError(
            "The first position cannot be higher than the last position"
        )
    return first, last


def _inner(loc_str):
    if "(" not in loc_str or not loc_str.endswith(")"):
        raise ValueError(f"Unbalanced parentheses in '{loc_str}'")
    return loc_str[loc_str.index("(") + 1 : -1]


def _split_top_level(loc_str):
    """
    Split at commas that are not enclosed by parentheses.
    """
    parts = []
    depth = 0
    part_start = 0
    for i, char in enumerate(loc_str):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(loc_str[part_start:i])
            part_start = i + 1
    parts.append(loc_str[part_start:])
    return parts


def get_unrecognized(feature, feature_types=FEATURE_TYPES,
                     qualifier_keys=QUALIFIER_KEYS):
    """
    Find the tokens of a feature, that are not part of the GenBank
    vocabularies.

    Unrecognized types and qualifiers are kept by :func:`parse_features()`,
    so this function can be used to validate a feature afterwards.

    Parameters
    ----------
    feature : Feature
        The feature to be checked.
    feature_types, qualifier_keys : Vocabulary, optional
        The known feature types and qualifier keys.

    Returns
    -------
    unrecognized : list of str
        The unrecognized feature type (if any) followed by the
        unrecognized qualifier keys.
    """
    unrecognized = []
    if feature.type not in feature_types:
        unrecognized.append(feature.type)
    for key in feature.attributes:
        if key not in qualifier_keys:
            unrecognized.append(key)
    return unrecognized
