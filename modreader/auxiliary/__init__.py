from .structures import (
    ModReaderError, DataAccessError, RemapWarning)

from .utils import (
    AccessionType, UNIMOD_PREFIX,
    get_accession_type, normalize_unimod_accession, is_chemod_accession,
    parse_chemod_mass)
