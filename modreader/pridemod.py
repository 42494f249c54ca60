"""
pridemod - curated PRIDE Mod aggregations
=========================================

PRIDE Mod groups Unimod and PSI-MOD terms under biologically meaningful
labels. Each aggregation (:py:class:`~modreader.model.PRIDEModPTM`) is built
around one general Unimod modification and lists the PSI-MOD terms it covers.

The XML layout read by :py:meth:`PRIDEModIndex.from_xml`::

    <prideModifications>
      <prideModification>
        <accession>PRDMOD:35</accession>
        <title>oxidation</title>
        <shortName>Ox</shortName>
        <diffMono>15.994915</diffMono>
        <biologicalSignificance>1</biologicalSignificance>
        <specificityList>
          <specificity><name>M</name><position>Anywhere</position></specificity>
        </specificityList>
        <unimodMappings><unimodMapping id="35"/></unimodMappings>
        <psiModMappings><psiModMapping id="MOD:00719"/></psiModMappings>
      </prideModification>
    </prideModifications>

Only the first ``unimodMapping`` is used as the general reference.

Dependencies
------------

This module requires :py:mod:`lxml` and :py:mod:`numpy`.
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

from lxml import etree

from .auxiliary import DataAccessError, normalize_unimod_accession
from .index import OntologyIndex
from .model import PRIDEModPTM, Specificity
from .unimod import preprocess_xml

logger = logging.getLogger(__name__)


def _text(element, path):
    child = element.find(path)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def _mapping_id(element):
    value = element.get('id')
    if value is None:
        value = element.get('accession')
    if value is None and element.text:
        value = element.text
    return value.strip() if value is not None else None


def _process_modification(mod):
    accession = _text(mod, 'accession') or mod.get('accession') or mod.get('id')
    if not accession:
        raise ValueError('PRIDE modification without accession')
    name = _text(mod, 'title')
    specificities = [Specificity(_text(sp, 'name'), _text(sp, 'position'))
                     for sp in mod.iterfind('specificityList/specificity')]
    unimod_reference = None
    for mapping in mod.iterfind('unimodMappings/unimodMapping'):
        unimod_reference = normalize_unimod_accession(_mapping_id(mapping))
        break
    psimod_references = [_mapping_id(mapping) for mapping in mod.iterfind('psiModMappings/psiModMapping')]
    significance = _text(mod, 'biologicalSignificance')
    return PRIDEModPTM(
        accession, name,
        short_name=_text(mod, 'shortName'),
        mono_delta_mass=_text(mod, 'diffMono'),
        avg_delta_mass=_text(mod, 'diffAvg'),
        specificities=specificities,
        unimod_reference=unimod_reference,
        psimod_references=[ref for ref in psimod_references if ref],
        biological_significance=significance in ('1', 'true'))


class PRIDEModIndex(OntologyIndex):
    """Index of PRIDE Mod aggregations, with lookups by child accession."""
    name = 'PRIDE Mod'

    def __init__(self, ptms, name=None):
        super(PRIDEModIndex, self).__init__(ptms, name)
        self._by_child = {}
        for ptm in self:
            for child in ptm.children:
                self._by_child.setdefault(child, ptm)

    def by_child_accession(self, accession):
        """Return the first aggregation that lists `accession` as its
        general Unimod reference or as a PSI-MOD mapping, or :py:const:`None`."""
        if accession is None:
            return None
        key = normalize_unimod_accession(accession) or accession
        return self._by_child.get(key)

    def general_modification(self, candidates):
        """Pick the general Unimod modification for a list of candidates.

        A general modification is only assigned when the choice is
        unambiguous: if `candidates` contains exactly one distinct record it
        is returned, otherwise :py:const:`None`. Masses that map to several
        modifications need manual curation.

        Parameters
        ----------
        candidates : list of :py:class:`~modreader.model.PTM`

        Returns
        -------
        out : PTM or None
        """
        distinct = list(dict.fromkeys(candidates))
        if len(distinct) == 1:
            return distinct[0]
        return None

    @classmethod
    def from_xml(cls, source):
        """Read a PRIDE Mod XML file.

        Parameters
        ----------
        source : str or file

        Raises
        ------
        DataAccessError
            If the file cannot be read or parsed.
        """
        try:
            tree = preprocess_xml(source)
            ptms = [_process_modification(mod) for mod in tree.iterfind('.//prideModification')]
        except (IOError, OSError, etree.Error, ValueError) as e:
            logger.error('Could not read PRIDE Mod from %r', source, exc_info=True)
            raise DataAccessError('Exception while trying to read PRIDE Mod from {!r}'.format(source), e) from e
        logger.debug('Read %d PRIDE modifications', len(ptms))
        return cls(ptms)
