# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "flatseq.io.json"
__all__ = ["JSONFile", "get_annotated_sequence", "set_annotated_sequence"]

import dataclasses
import json
from ...annotation import (
    AnnotatedSequence,
    Feature,
    Locus,
    Meta,
    Primary,
    Reference,
    Sequence,
)
from ...file import DeserializationError, SerializationError, TextFile


class JSONFile(TextFile):
    """
    This class represents a JSON file containing a single
    :class:`AnnotatedSequence`.

    Examples
    --------

    >>> annot_seq = AnnotatedSequence()
    >>> annot_seq.meta.name = "test"
    >>> annot_seq.features.append(Feature(type="gene", start=1, end=10))
    >>> json_file = JSONFile()
    >>> set_annotated_sequence(json_file, annot_seq)
    >>> restored = get_annotated_sequence(json_file)
    >>> print(restored.meta.name, restored.features[0].type)
    test gene
    >>> print(restored == annot_seq)
    True
    """

    pass


def get_annotated_sequence(json_file):
    """
    Parse a JSON file into an :class:`AnnotatedSequence`.

    Parameters
    ----------
    json_file : JSONFile
        The file to be parsed.

    Returns
    -------
    annot_seq : AnnotatedSequence
        The annotated sequence.

    Raises
    ------
    DeserializationError
        If the file is not valid JSON or a value has the wrong type.
    """
    try:
        data = json.loads("\n".join(json_file.lines))
    except json.JSONDecodeError as e:
        raise DeserializationError(f"The file is not valid JSON: {e}")
    annot_seq = _from_dict(AnnotatedSequence, data)
    annot_seq.meta = _from_dict(Meta, annot_seq.meta)
    meta = annot_seq.meta
    if meta.locus is not None:
        meta.locus = _from_dict(Locus, meta.locus)
    meta.references = [
        _from_dict(Reference, ref) for ref in _as_list(meta.references)
    ]
    meta.primaries = [
        _from_dict(Primary, primary) for primary in _as_list(meta.primaries)
    ]
    annot_seq.features = [
        _from_dict(Feature, feature) for feature in _as_list(annot_seq.features)
    ]
    for feature in annot_seq.features:
        if not isinstance(feature.attributes, dict):
            raise DeserializationError(
                "Expected an object for the feature attributes"
            )
        for key, value in feature.attributes.items():
            if not isinstance(value, str):
                raise DeserializationError(
                    f"Expected 'str' for the value of the feature attribute "
                    f"'{key}', but got '{type(value).__name__}'"
                )
    annot_seq.sequence = _from_dict(Sequence, annot_seq.sequence)
    return annot_seq


def set_annotated_sequence(json_file, annot_seq, indent=1):
    """
    Write an :class:`AnnotatedSequence` into a JSON file.

    Any content of the file is replaced.

    Parameters
    ----------
    json_file : JSONFile
        The file to write into.
    annot_seq : AnnotatedSequence
        The annotated sequence to be written.
    indent : int, optional
        The indentation of nested JSON objects.

    Raises
    ------
    SerializationError
        If an attribute contains a value that cannot be represented in
        JSON.
    """
    try:
        text = json.dumps(dataclasses.asdict(annot_seq), indent=indent)
    except TypeError as e:
        raise SerializationError(str(e))
    json_file.lines = text.splitlines()


def _from_dict(cls, data):
    """
    Create an instance of the given dataclass from a dictionary,
    ignoring unknown keys.
    Values of text, integer and boolean fields must have the type of
    the field's default value.
    """
    if isinstance(data, cls):
        # Already converted default value
        return data
    if not isinstance(data, dict):
        raise DeserializationError(
            f"Expected an object for '{cls.__name__}', "
            f"but got '{type(data).__name__}'"
        )
    fields = {field.name: field for field in dataclasses.fields(cls)}
    kwargs = {key: val for key, val in data.items() if key in fields}
    for key, val in kwargs.items():
        _check_type(cls, key, fields[key].default, val)
    return cls(**kwargs)


def _check_type(cls, key, default, value):
    if not isinstance(default, (str, int)):
        # Nested objects and arrays are converted separately
        return
    # 'bool' is a subclass of 'int', but not interchangeable
    if isinstance(value, bool) != isinstance(default, bool) \
            or not isinstance(value, type(default)):
        raise DeserializationError(
            f"Expected '{type(default).__name__}' for "
            f"'{cls.__name__}.{key}', but got '{type(value).__name__}'"
        )


def _as_list(value):
    if not isinstance(value, list):
        raise DeserializationError(
            f"Expected an array, but got '{type(value).__name__}'"
        )
    return value
