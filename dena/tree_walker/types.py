"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.
"""

from abc import ABC
from typing import Sequence, Union, Optional

# Numbers are floats, strings are str, true/false are bool, and nil is None.
NATIVE_DATA = Optional[Union[float, str, bool]]

class DenaValue(ABC):
	""" Root for classes that implement specialized run-time data structures """
	pass

VALUE = Union[NATIVE_DATA, DenaValue]
ARGS = Sequence[VALUE]
