"""
'     _____  __ __  _____ __ __  ____ ____   ____
'    |     \|  |  |/ ___/|  |  ||    |    \ /    |
'    |  o  )  |  (   \_ |  |  | |  ||  _  |  o  |
'    |   _/|  |  |\__  ||  _  | |  ||  |  |  Q  |
'    |  |  |  :  |/  \ ||  |  | |  ||  |  |__   |
'    |__|   \__,_|\____||__|__||____|__|__|  |__|
"""
import logging

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable, SortLevel

# expose the factory functions
from .factories import (
    from_iterable,
    from_producer,
    from_range,
    repeat,
    empty,
    generate,
    pushinq,
    P,
)

# expose comparers, hashing and the membership set
from . import comparers, hashcode
from .comparers import EqualityComparer
from .hash_set import HashSet

# expose supporting data classes
from .types import Outcome, SingleResult, Group
from .extensions.stats import NumericKind
from .errors import NoElementsError, MultipleElementsError, ERR_NO_ELEMENTS, ERR_MULTIPLE_ELEMENTS

# library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())


def enable_debug_logging(level: int = logging.DEBUG) -> None:
    """send this package's log records to stderr, e.g. to watch materialization points"""
    logger = logging.getLogger(__name__)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(level)


# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "SortLevel",
    "from_iterable",
    "from_producer",
    "from_range",
    "repeat",
    "empty",
    "generate",
    "pushinq",
    "P",
    "comparers",
    "hashcode",
    "EqualityComparer",
    "HashSet",
    "Outcome",
    "SingleResult",
    "Group",
    "NumericKind",
    "NoElementsError",
    "MultipleElementsError",
    "ERR_NO_ELEMENTS",
    "ERR_MULTIPLE_ELEMENTS",
    "enable_debug_logging",
]
