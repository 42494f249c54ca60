"""
model - modification records
============================

Summary
-------

The records held by the ontology indices. All of them share the
:py:class:`PTM` capability set (accession, name, description, mass deltas and
site specificities). Ontology-specific data lives on the subclasses:

  :py:class:`UnimodPTM` - an entry of the Unimod mass dictionary.

  :py:class:`PSIModPTM` - a PSI-MOD term, with Unimod cross-references,
  obsolescence information and ``is_a`` parents.

  :py:class:`PRIDEModPTM` - a curated PRIDE Mod aggregation built around a
  general Unimod modification.

  :py:class:`MSModification` - PSI-MS pseudo-modifications for neutral losses.

Records are built once by the loaders and are never changed afterwards.
They compare and hash by value.

Functions
---------

  :py:func:`filter_by_specificity` - keep the records observed on a given
  residue and/or position.
"""

#   Copyright 2026 modreader developers
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

from collections import namedtuple


class Specificity(namedtuple('Specificity', ('site', 'position'))):
    """A site at which a modification can occur.

    Attributes
    ----------
    site : str
        One-letter amino acid code, ``'N-term'``, ``'C-term'`` or ``'X'``.
    position : str or None
        Position class, e.g. ``'Anywhere'``, ``'Any N-term'``, ``'Protein C-term'``.
    """
    __slots__ = ()

    def __new__(cls, site, position=None):
        return super(Specificity, cls).__new__(cls, site, position)

    def matches(self, site=None, position=None):
        """Check the specificity against a requested residue and/or position.

        The residue must be equal (case-insensitive). The requested position
        only has to be contained in this one, so ``'N-term'`` matches both
        ``'Any N-term'`` and ``'Protein N-term'``. Arguments left as
        :py:const:`None` are not checked.
        """
        if site is not None:
            if self.site is None or self.site.lower() != site.lower():
                return False
        if position is not None:
            if self.position is None or position.lower() not in self.position.lower():
                return False
        return True

    def __str__(self):
        if self.position:
            return '{}@{}'.format(self.site, self.position)
        return str(self.site)


class PTM(object):
    """Common modification record.

    Attributes
    ----------
    accession : str
    name : str
    description : str or None
    mono_delta_mass : float or None
    avg_delta_mass : float or None
    specificities : tuple of :py:class:`Specificity`
    """
    provider = None

    def __init__(self, accession, name, description=None, mono_delta_mass=None,
                 avg_delta_mass=None, specificities=()):
        self.accession = accession
        self.name = name
        self.description = description
        self.mono_delta_mass = _float_or_none(mono_delta_mass)
        self.avg_delta_mass = _float_or_none(avg_delta_mass)
        self.specificities = tuple(specificities or ())

    def _key(self):
        return (self.accession, self.name, self.description, self.mono_delta_mass,
                self.avg_delta_mass, self.specificities)

    def __eq__(self, other):
        if type(self) is not type(other):
            return False
        return self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self.accession))

    def __repr__(self):
        return '{}({!r}, {!r})'.format(type(self).__name__, self.accession, self.name)

    def has_specificity(self, site=None, position=None):
        """Whether any of the specificities matches `site` and `position`.
        See :py:meth:`Specificity.matches`."""
        return any(s.matches(site, position) for s in self.specificities)


class UnimodPTM(PTM):
    provider = 'unimod'

    def __init__(self, accession, name, description=None, mono_delta_mass=None,
                 avg_delta_mass=None, specificities=(), approved=True, alt_names=()):
        super(UnimodPTM, self).__init__(
            accession, name, description, mono_delta_mass, avg_delta_mass, specificities)
        self.approved = approved
        self.alt_names = tuple(alt_names or ())

    def _key(self):
        return super(UnimodPTM, self)._key() + (self.approved, self.alt_names)


class PSIModPTM(PTM):
    """A PSI-MOD term.

    Attributes
    ----------
    unimod_references : tuple of str
        Equivalent Unimod accessions, in ``UNIMOD:<n>`` form.
    obsolete : bool
    remap_id : str or None
        Accession of the term replacing this one. Only meaningful when `obsolete` is set.
    parents : tuple of str
        ``is_a`` parent accessions within PSI-MOD.
    """
    provider = 'psimod'

    def __init__(self, accession, name, description=None, mono_delta_mass=None,
                 avg_delta_mass=None, specificities=(), unimod_references=(),
                 obsolete=False, remap_id=None, parents=()):
        super(PSIModPTM, self).__init__(
            accession, name, description, mono_delta_mass, avg_delta_mass, specificities)
        self.unimod_references = tuple(unimod_references or ())
        self.obsolete = bool(obsolete)
        self.remap_id = remap_id or None
        self.parents = tuple(parents or ())

    def _key(self):
        return super(PSIModPTM, self)._key() + (
            self.unimod_references, self.obsolete, self.remap_id, self.parents)


class PRIDEModPTM(PTM):
    """A PRIDE Mod aggregation.

    Attributes
    ----------
    short_name : str
    biological_significance : bool
    unimod_reference : str or None
        The general Unimod modification the aggregation is built around.
    psimod_references : tuple of str
        PSI-MOD terms grouped under this aggregation.
    """
    provider = 'pridemod'

    def __init__(self, accession, name, short_name=None, mono_delta_mass=None,
                 avg_delta_mass=None, specificities=(), unimod_reference=None,
                 psimod_references=(), biological_significance=False, description=None):
        super(PRIDEModPTM, self).__init__(
            accession, name, description if description is not None else name,
            mono_delta_mass, avg_delta_mass, specificities)
        self.short_name = short_name if short_name is not None else name
        self.unimod_reference = unimod_reference
        self.psimod_references = tuple(psimod_references or ())
        self.biological_significance = bool(biological_significance)

    @property
    def children(self):
        """Accessions aggregated by this record: the Unimod reference first,
        then the PSI-MOD mappings."""
        if self.unimod_reference is None:
            return self.psimod_references
        return (self.unimod_reference,) + self.psimod_references

    def _key(self):
        return super(PRIDEModPTM, self)._key() + (
            self.short_name, self.unimod_reference, self.psimod_references,
            self.biological_significance)


class MSModification(PTM):
    """PSI-MS terms used as modification accessions for neutral losses.

    These are not read from any file; the known terms are listed in
    :py:attr:`MSModification.terms`.
    """
    provider = 'ms'

    terms = {
        'MS:1001524': ('fragment neutral loss',
                       'This term can describe a neutral loss m/z value that is lost from an ion.'),
        'MS:1001525': ('precursor neutral loss',
                       'This term can describe a neutral loss m/z value that is lost from the precursor ion.'),
    }

    @classmethod
    def get_by_accession(cls, accession):
        """Return the :py:class:`MSModification` for `accession`, or :py:const:`None`."""
        if accession is None:
            return None
        key = accession.strip().upper()
        try:
            name, description = cls.terms[key]
        except KeyError:
            return None
        return cls(key, name, description)


def filter_by_specificity(ptms, site=None, position=None):
    """Keep the records that have a specificity matching `site` and `position`.

    Parameters
    ----------
    ptms : iterable of :py:class:`PTM`
    site : str or None, optional
        Residue to match. If :py:const:`None`, any residue is accepted.
    position : str or None, optional
        Position to match. If :py:const:`None`, any position is accepted.

    Returns
    -------
    out : list
        The matching records in input order. Empty if nothing matches.
    """
    if site is None and position is None:
        return list(ptms)
    return [ptm for ptm in ptms if ptm.has_specificity(site, position)]


def _float_or_none(value):
    if value is None or value == '':
        return None
    return float(value)
