# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "flatseq"
__all__ = [
    "File",
    "TextFile",
    "InvalidFileError",
    "MalformedLocusError",
    "TruncatedBlockError",
    "SerializationError",
    "DeserializationError",
]

import abc
import io
from os import PathLike


class File(metaclass=abc.ABCMeta):
    """
    Base class for all file classes.
    The constructor creates an empty file, that can be filled with data
    using the class specific setter functions.
    Conversely, the class method :func:`read()` reads a file from disk
    (or a file-like object from other sources).
    In order to write the instance content into a file the
    :func:`write()` method is used.
    """

    @classmethod
    @abc.abstractmethod
    def read(cls, file):
        """
        Parse a file (or file-like object).

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.

        Returns
        -------
        file : File
            An instance from the respective :class:`File` subclass
            representing the parsed file.

        Raises
        ------
        OSError
            If a file path is given that cannot be opened.
        """
        pass

    @abc.abstractmethod
    def write(self, file):
        """
        Write the contents of this :class:`File` object into a file.

        Parameters
        ----------
        file : file-like object or str
            The file to be written to.
            Alternatively a file path can be supplied.
        """
        pass


class TextFile(File, metaclass=abc.ABCMeta):
    """
    Base class for all line based text files.
    When reading a file, the text content is saved as list of strings,
    one for each line.
    When writing a file, this list is written into the file.

    Attributes
    ----------
    lines : list
        List of string representing the lines in the text file.
        PROTECTED: Do not modify from outside.
    """

    def __init__(self):
        super().__init__()
        self.lines = []

    @classmethod
    def read(cls, file, *args, **kwargs):
        # File name
        if is_open_compatible(file):
            with open(file, "r") as f:
                lines = f.read().splitlines()
        # File object
        else:
            if not is_text(file):
                raise TypeError("A file opened in 'text' mode is required")
            lines = file.read().splitlines()
        file_object = cls(*args, **kwargs)
        file_object.lines = lines
        return file_object

    @classmethod
    def from_string(cls, text, *args, **kwargs):
        """
        Create a file object from the complete text content of a file.

        Parameters
        ----------
        text : str
            The file content.

        Returns
        -------
        file_object : TextFile
            An instance of the respective subclass.
        """
        return cls.read(io.StringIO(text), *args, **kwargs)

    def write(self, file):
        """
        Write the contents of this object into a file
        (or file-like object).

        Parameters
        ----------
        file : file-like object or str
            The file to be written to.
            Alternatively a file path can be supplied.
        """
        if is_open_compatible(file):
            with open(file, "w") as f:
                f.write("\n".join(self.lines) + "\n")
        else:
            if not is_text(file):
                raise TypeError("A file opened in 'text' mode is required")
            file.write("\n".join(self.lines) + "\n")

    def __str__(self):
        return "\n".join(self.lines)


class InvalidFileError(Exception):
    """
    Indicates that the file is not suitable for the requested action,
    either because the file does not contain the required data or
    because the file is malformed.

    Parameters
    ----------
    message : str
        Description of the problem.
    line_number : int, optional
        The 1-based number of the offending line, if the problem can be
        pinned to a line.

    Attributes
    ----------
    line_number : int or None
        Same as the parameter.
    """

    def __init__(self, message, line_number=None):
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class MalformedLocusError(InvalidFileError):
    """
    Indicates that the *LOCUS* line of a GenBank record does not contain
    the expected tokens.
    """

    pass


class TruncatedBlockError(InvalidFileError):
    """
    Indicates that the input ended inside a GenBank block, before the
    block was terminated by another top-level keyword or ``//``.
    """

    pass


class SerializationError(Exception):
    pass


class DeserializationError(Exception):
    pass


def wrap_string(text, width):
    """
    A much simpler and hence much more efficient version of
    `textwrap.wrap()`.

    This function simply wraps the given `text` after `width`
    characters, ignoring sentences, whitespaces, etc.

    Parameters
    ----------
    text : str
        The text to be wrapped.
    width : int
        The maximum number of characters per line.

    Returns
    -------
    lines : list of str
        The wrapped lines.
    """
    lines = []
    for i in range(0, len(text), width):
        lines.append(text[i : i + width])
    return lines


def is_text(file):
    if isinstance(file, io.TextIOBase):
        return True
    # for file wrappers, e.g. 'TemporaryFile'
    return hasattr(file, "file") and isinstance(file.file, io.TextIOBase)


def is_open_compatible(file):
    return isinstance(file, (str, bytes, PathLike))
