"""
reader - resolve modifications across Unimod, PSI-MOD and PRIDE Mod
===================================================================

Summary
-------

:py:class:`ModReader` brings the three modification vocabularies together.
It is built from three indices, holds no other state and never changes
them, so a single reader can be shared between threads. Several readers with
different data can coexist.

Lookup
------

  :py:meth:`ModReader.get_ptm_by_accession` - find a modification by a
  ``UNIMOD:``, ``MOD:`` or ``MS:`` accession.

  :py:meth:`ModReader.get_ptm_list_by_pattern_name`,
  :py:meth:`ModReader.get_ptm_list_by_equal_name`,
  :py:meth:`ModReader.get_ptm_list_by_pattern_description`,
  :py:meth:`ModReader.get_ptm_list_by_specificity`,
  :py:meth:`ModReader.get_ptm_list_by_mono_delta_mass`,
  :py:meth:`ModReader.get_ptm_list_by_avg_delta_mass` - search Unimod and
  PSI-MOD. Unimod hits come first; the lists are not deduplicated.

Anchor modifications
--------------------

  :py:meth:`ModReader.get_anchor_modification` - remap a modification onto
  Unimod and keep the records consistent with an observed site.

  :py:meth:`ModReader.get_anchor_mass_modification` - the same, starting from
  a mass delta.

  :py:meth:`ModReader.is_wrong_annotated` - check whether a modification can
  occur on a residue at all.

PRIDE Mod
---------

  :py:meth:`ModReader.get_pridemod_by_accession` - find the PRIDE Mod
  aggregation for a Unimod, PSI-MOD or ``CHEMOD:<mass>`` accession.

Example
-------

    >>> reader = ModReader.load('unimod.xml', 'PSI-MOD.obo', 'pride_mods.xml')  # doctest: +SKIP
    >>> reader.get_anchor_modification('MOD:00719', site='M')  # doctest: +SKIP
    [UnimodPTM('UNIMOD:35', 'Oxidation')]
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

import logging

from .auxiliary import (AccessionType, DataAccessError, get_accession_type,
                        is_chemod_accession, parse_chemod_mass)
from .model import MSModification, filter_by_specificity
from .remap import Remapper, DEFAULT_MAX_DEPTH
from .unimod import UnimodIndex, _unimod_xml_download_url
from .psimod import PSIModIndex
from .pridemod import PRIDEModIndex

logger = logging.getLogger(__name__)


def _accession_key(accession):
    """Sort key putting ``UNIMOD:4`` before ``UNIMOD:21``."""
    prefix, _, number = accession.rpartition(':')
    if number.isdigit():
        return (prefix, 0, int(number), '')
    return (prefix, 1, 0, number)


def _sorted(ptms):
    return sorted(ptms, key=lambda ptm: (ptm.provider or '', _accession_key(ptm.accession)))


class ModReader(object):
    """Modification lookup and remapping over Unimod, PSI-MOD and PRIDE Mod.

    Parameters
    ----------
    unimod : :py:class:`~modreader.unimod.UnimodIndex`
    psimod : :py:class:`~modreader.psimod.PSIModIndex`
    pridemod : :py:class:`~modreader.pridemod.PRIDEModIndex`
    max_depth : int, optional
        Passed to :py:class:`~modreader.remap.Remapper`.
    """

    def __init__(self, unimod, psimod, pridemod, max_depth=DEFAULT_MAX_DEPTH):
        self.unimod = unimod
        self.psimod = psimod
        self.pridemod = pridemod
        self.remapper = Remapper(unimod, psimod, max_depth=max_depth)

    @classmethod
    def load(cls, unimod_source=None, psimod_source=None, pridemod_source=None, **kwargs):
        """Read all three vocabularies and build a reader.

        Parameters
        ----------
        unimod_source : str or file, optional
            Unimod XML. Defaults to the Unimod download URL.
        psimod_source : str or file, optional
            PSI-MOD OBO file. If :py:const:`None`, PSI-MOD is loaded through :py:mod:`psims`.
        pridemod_source : str or file
            PRIDE Mod XML.
        **kwargs
            Passed to the constructor.

        Raises
        ------
        DataAccessError
            If any of the vocabularies cannot be read. No reader is created then.
        """
        if pridemod_source is None:
            raise DataAccessError('A PRIDE Mod source is required')
        # the loaders log their own failures
        unimod = UnimodIndex.from_xml(unimod_source or _unimod_xml_download_url)
        if psimod_source is None:
            psimod = PSIModIndex.from_psims()
        else:
            psimod = PSIModIndex.from_obo(psimod_source)
        pridemod = PRIDEModIndex.from_xml(pridemod_source)
        logger.debug('Loaded %d Unimod, %d PSI-MOD and %d PRIDE Mod records',
                     len(unimod), len(psimod), len(pridemod))
        return cls(unimod, psimod, pridemod, **kwargs)

    def get_ptm_by_accession(self, accession):
        """Find a modification by accession.

        ``MS:`` accessions are PSI-MS neutral loss terms, ``UNIMOD:`` are
        looked up in Unimod and ``MOD:`` in PSI-MOD.

        Returns
        -------
        out : PTM or None
            :py:const:`None` for unknown accessions or prefixes.
        """
        kind = get_accession_type(accession)
        if kind is AccessionType.ms:
            return MSModification.get_by_accession(accession)
        if kind is AccessionType.unimod:
            return self.unimod.get(accession)
        if kind is AccessionType.psimod:
            return self.psimod.get(accession.strip().upper())
        return None

    def get_ptm_list_by_pattern_name(self, pattern):
        return self.unimod.by_name_pattern(pattern) + self.psimod.by_name_pattern(pattern)

    def get_ptm_list_by_pattern_description(self, pattern):
        return self.unimod.by_description_pattern(pattern) + self.psimod.by_description_pattern(pattern)

    def get_ptm_list_by_equal_name(self, name):
        """All modifications named exactly `name`. PSI-MOD may give several
        different terms the same name."""
        return self.unimod.by_equal_name(name) + self.psimod.by_equal_name(name)

    def get_ptm_list_by_specificity(self, specificity):
        return self.unimod.by_specificity(specificity) + self.psimod.by_specificity(specificity)

    def get_ptm_list_by_mono_delta_mass(self, delta, tolerance=None):
        """Search Unimod and PSI-MOD by monoisotopic mass delta.

        Parameters
        ----------
        delta : float or None
            Returns an empty list if :py:const:`None`.
        tolerance : float or None, optional
            Absolute tolerance. Exact match if :py:const:`None`.
        """
        if delta is None:
            return []
        return (self.unimod.by_mono_delta_mass(delta, tolerance) +
                self.psimod.by_mono_delta_mass(delta, tolerance))

    def get_ptm_list_by_avg_delta_mass(self, delta, tolerance=None):
        """Search Unimod and PSI-MOD by average mass delta."""
        if delta is None:
            return []
        return (self.unimod.by_avg_delta_mass(delta, tolerance) +
                self.psimod.by_avg_delta_mass(delta, tolerance))

    def get_unimod_ptms(self):
        """All Unimod modifications."""
        return self.unimod.ptms

    def remap(self, ptms):
        """See :py:meth:`modreader.remap.Remapper.remap`."""
        return self.remapper.remap(ptms)

    def get_anchor_modification(self, accession, site=None, position=None, by_mass=False, tolerance=None):
        """List the anchor modifications for `accession`.

        The modification is looked up, optionally widened to every
        modification with the same monoisotopic mass delta, remapped onto
        Unimod (see :py:class:`~modreader.remap.Remapper`) and filtered by
        the observed residue and position.

        Parameters
        ----------
        accession : str
        site : str or None, optional
            Observed residue.
        position : str or None, optional
            Observed position, e.g. ``'N-term'``.
        by_mass : bool, optional
            Start from all modifications sharing the mass delta of `accession`.
            If none are found, the modification itself is used.
        tolerance : float or None, optional
            Mass tolerance for `by_mass`.

        Returns
        -------
        out : list
            Sorted by provider and accession. Empty if the accession is unknown
            or nothing matches the site.
        """
        ptm = self.get_ptm_by_accession(accession)
        if ptm is None:
            return []
        ptms = []
        if by_mass:
            ptms = self.get_ptm_list_by_mono_delta_mass(ptm.mono_delta_mass, tolerance)
        if not ptms:
            ptms = [ptm]
        return self._anchor(ptms, site, position)

    def get_anchor_mass_modification(self, mass, tolerance=None, site=None, position=None):
        """List the anchor modifications for a monoisotopic mass delta.
        See :py:meth:`get_anchor_modification`."""
        return self._anchor(self.get_ptm_list_by_mono_delta_mass(mass, tolerance), site, position)

    def _anchor(self, ptms, site, position):
        remapped = self.remapper.remap(ptms)
        return _sorted(filter_by_specificity(remapped, site, position))

    def is_wrong_annotated(self, accession, site):
        """Whether `accession` has no anchor modification on residue `site`."""
        return not self.get_anchor_modification(accession, site=site)

    def get_unique_unimod_accession(self, accession, site=None):
        """The Unimod accession of the only modification matching a ``CHEMOD:<mass>``.

        Returns
        -------
        out : str or None
            :py:const:`None` if `accession` is not a valid ``CHEMOD`` accession
            or the mass matches no or several Unimod records.
        """
        mass = parse_chemod_mass(accession)
        if mass is None:
            return None
        candidates = self.unimod.by_mono_delta_mass(mass, site=site)
        if len(candidates) == 1:
            return candidates[0].accession
        return None

    def _general_unimod_accession(self, accession, site=None):
        if not is_chemod_accession(accession):
            return None
        mass = parse_chemod_mass(accession)
        if mass is None:
            return None
        candidates = self.unimod.by_mono_delta_mass(mass, site=site)
        general = self.pridemod.general_modification(candidates)
        if general is not None:
            return general.accession
        return None

    def get_pridemod_by_accession(self, accession, site=None):
        """Find the PRIDE Mod aggregation containing `accession`.

        A ``CHEMOD:<mass>`` accession is first replaced by the Unimod
        modification with that exact mass (on residue `site`, if given),
        but only when there is exactly one such modification. Otherwise the
        accession is used as it is.

        Returns
        -------
        out : PRIDEModPTM or None
        """
        general = self._general_unimod_accession(accession, site)
        if general is not None:
            accession = general
        return self.pridemod.by_child_accession(accession)
