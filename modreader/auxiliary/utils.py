import re
from enum import Enum


class AccessionType(Enum):
    unknown = 0
    ms = 1
    unimod = 2
    psimod = 3
    chemod = 4


_accession_prefixes = [
    ('ms:', AccessionType.ms),
    ('unimod:', AccessionType.unimod),
    ('mod:', AccessionType.psimod),
    ('chemod:', AccessionType.chemod),
]

UNIMOD_PREFIX = 'UNIMOD:'

_chemod_pattern = re.compile(r'^chemod:\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))\s*$', re.I)


def get_accession_type(accession):
    """Classify `accession` by its CV prefix.

    Parameters
    ----------
    accession : str

    Returns
    -------
    out : AccessionType
        :py:attr:`AccessionType.unknown` for anything without a recognized prefix.
    """
    if not isinstance(accession, str):
        return AccessionType.unknown
    lowered = accession.strip().lower()
    for prefix, kind in _accession_prefixes:
        if lowered.startswith(prefix):
            return kind
    return AccessionType.unknown


def normalize_unimod_accession(accession):
    """Bring a Unimod accession to the ``UNIMOD:<n>`` form.

    Accepts ``'UNIMOD:35'``, ``'Unimod:35'``, ``'35'`` and ``35``.
    Returns :py:const:`None` if `accession` does not look like a Unimod record ID.
    """
    if accession is None:
        return None
    if isinstance(accession, int):
        return UNIMOD_PREFIX + str(accession)
    value = accession.strip()
    if value.lower().startswith('unimod:'):
        value = value.split(':', 1)[1].strip()
    if value.isdigit():
        return UNIMOD_PREFIX + str(int(value))
    return None


def is_chemod_accession(accession):
    return get_accession_type(accession) is AccessionType.chemod


def parse_chemod_mass(accession):
    """Extract the mass delta from a generic ``CHEMOD:<mass>`` accession.

    Parameters
    ----------
    accession : str
        E.g. ``'CHEMOD:34.560056'`` or ``'CHEMOD:-345.8999'``.

    Returns
    -------
    out : float or None
    """
    if not isinstance(accession, str):
        return None
    match = _chemod_pattern.match(accession)
    if match is None:
        return None
    return float(match.group(1))
