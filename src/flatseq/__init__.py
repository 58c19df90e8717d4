# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *flatseq*.
It provides the in-memory model of an annotated sequence and the base
classes for the file formats in :mod:`flatseq.io`.
"""

__version__ = "0.3.0"
__name__ = "flatseq"
__author__ = "The flatseq contributors"

from .file import *
from .annotation import *
