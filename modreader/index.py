"""
index - immutable modification indices
======================================

:py:class:`OntologyIndex` is the read-only lookup structure shared by the
Unimod, PSI-MOD and PRIDE Mod indices. It is filled once from a sequence of
:py:class:`~modreader.model.PTM` records and never modified afterwards, so it
can be queried from several threads at once.

Mass queries use sorted :py:mod:`numpy` arrays of the mono- and average mass
deltas, so a tolerance window costs two binary searches.

Dependencies
------------

This module requires :py:mod:`numpy`.
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

import numpy as np

from .auxiliary import DataAccessError

logger = logging.getLogger(__name__)


class _MassArray(object):
    """Sorted mass deltas with the load positions of the records carrying them.
    Records without the mass are left out."""

    def __init__(self, ptms, attribute):
        positions = []
        masses = []
        for i, ptm in enumerate(ptms):
            value = getattr(ptm, attribute)
            if value is not None:
                positions.append(i)
                masses.append(value)
        masses = np.array(masses, dtype=np.float64)
        order = np.argsort(masses, kind='mergesort')
        self.masses = masses[order]
        self.positions = np.array(positions, dtype=np.intp)[order]

    def find(self, mass, tolerance=None):
        """Positions of records with mass in ``[mass - tolerance, mass + tolerance]``,
        in load order."""
        if tolerance is None:
            tolerance = 0.0
        lo = np.searchsorted(self.masses, mass - tolerance, side='left')
        hi = np.searchsorted(self.masses, mass + tolerance, side='right')
        return np.sort(self.positions[lo:hi])


class OntologyIndex(object):
    """An immutable accession-to-record map with search methods.

    Parameters
    ----------
    ptms : iterable of :py:class:`~modreader.model.PTM`
        Records in load order. Accessions must be unique.
    name : str, optional
        A label used in messages.

    Raises
    ------
    DataAccessError
        If two records share an accession.
    """
    name = 'ontology'

    def __init__(self, ptms, name=None):
        if name is not None:
            self.name = name
        self._ptms = tuple(ptms)
        self._by_accession = {}
        for ptm in self._ptms:
            if ptm.accession in self._by_accession:
                raise DataAccessError('Duplicate accession in {} index: {}'.format(self.name, ptm.accession))
            self._by_accession[ptm.accession] = ptm
        self._mono = _MassArray(self._ptms, 'mono_delta_mass')
        self._avg = _MassArray(self._ptms, 'avg_delta_mass')
        logger.debug('Indexed %d %s records', len(self._ptms), self.name)

    def get(self, accession, default=None):
        """Return the record for `accession`, or `default` if there is none."""
        return self._by_accession.get(accession, default)

    by_accession = get

    def __getitem__(self, accession):
        return self._by_accession[accession]

    def __contains__(self, accession):
        return accession in self._by_accession

    def __len__(self):
        return len(self._ptms)

    def __iter__(self):
        return iter(self._ptms)

    def __repr__(self):
        return '{}({} records)'.format(type(self).__name__, len(self))

    @property
    def ptms(self):
        """All records in load order, as a new list."""
        return list(self._ptms)

    def by_name_pattern(self, pattern):
        """Records whose name contains `pattern` (case-sensitive)."""
        return [ptm for ptm in self._ptms if ptm.name is not None and pattern in ptm.name]

    def by_equal_name(self, name):
        """Records whose name is exactly `name`. There can be several."""
        return [ptm for ptm in self._ptms if ptm.name == name]

    def by_description_pattern(self, pattern):
        """Records whose description contains `pattern` (case-sensitive)."""
        return [ptm for ptm in self._ptms if ptm.description is not None and pattern in ptm.description]

    def _by_mass(self, masses, mass, tolerance, site):
        if mass is None:
            return []
        result = [self._ptms[i] for i in masses.find(float(mass), tolerance)]
        if site is not None:
            result = [ptm for ptm in result if ptm.has_specificity(site)]
        return result

    def by_mono_delta_mass(self, mass, tolerance=None, site=None):
        """Search by monoisotopic mass delta.

        Parameters
        ----------
        mass : float
        tolerance : float or None, optional
            Absolute tolerance in Da. If :py:const:`None` (default),
            only exact matches are returned.
        site : str or None, optional
            If given, only records with a specificity on this residue are returned.

        Returns
        -------
        out : list
            Matching records in load order.
        """
        return self._by_mass(self._mono, mass, tolerance, site)

    def by_avg_delta_mass(self, mass, tolerance=None, site=None):
        """Search by average mass delta. Same as :py:meth:`by_mono_delta_mass` otherwise."""
        return self._by_mass(self._avg, mass, tolerance, site)

    def by_specificity(self, specificity):
        """Records with a specificity matching `specificity`.

        Parameters
        ----------
        specificity : :py:class:`~modreader.model.Specificity`
            Its `position` is only checked if set.
        """
        return [ptm for ptm in self._ptms if ptm.has_specificity(specificity.site, specificity.position)]
