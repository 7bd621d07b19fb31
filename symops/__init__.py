"""
symops: batch operations on sequences of symbolic music events

* sorting by kind-specific keys (:mod:`symops.ordering`)
* filtering, clipping, duration clamping and extent (:mod:`symops.ops`)
* remapping of time through a piecewise linear curve (:mod:`symops.adjust`)
"""
from .common import F
from .events import *
from .ordering import *
from .ops import *
from .breakpoints import *
from .adjust import *
from .config import config
from ._result import Result
