import logging

from .version import __version__
from .auxiliary import ModReaderError, DataAccessError, RemapWarning
from .model import (Specificity, PTM, UnimodPTM, PSIModPTM, PRIDEModPTM,
                    MSModification, filter_by_specificity)
from .index import OntologyIndex
from .unimod import UnimodIndex
from .psimod import PSIModIndex
from .pridemod import PRIDEModIndex
from .remap import Remapper
from .reader import ModReader

logging.getLogger(__name__).addHandler(logging.NullHandler())
