"""
psimod - the PSI-MOD ontology
=============================

This module turns PSI-MOD terms into a :py:class:`PSIModIndex` of
:py:class:`~modreader.model.PSIModPTM` records. The OBO file is parsed by
:py:mod:`psims`; any other source of term mappings with the same keys can be
used through :py:meth:`PSIModIndex.from_terms`.

The following term fields are used:

  - ``id``, ``name``, ``def``
  - ``is_a`` - parent accessions
  - ``is_obsolete``, ``replaced_by`` - obsolescence chain. A ``Remap to MOD:nnnnn``
    note in ``comment`` or ``remark`` is accepted in place of ``replaced_by``.
  - ``DiffMono``, ``DiffAvg`` - mass deltas
  - ``Origin``, ``TermSpec`` - residue and terminal specificity
  - ``Unimod`` - cross-references to Unimod

Dependencies
------------

This module requires :py:mod:`psims` and :py:mod:`numpy`.
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

import re
import logging

from psims.controlled_vocabulary.controlled_vocabulary import ControlledVocabulary, load_psimod

from .auxiliary import DataAccessError, normalize_unimod_accession
from .index import OntologyIndex
from .model import PSIModPTM, Specificity

logger = logging.getLogger(__name__)

_psimod_accession = re.compile(r'MOD:\d+')
_remap_note = re.compile(r'remap(?:ped)?\s+to\s+(MOD:\d+)', re.I)
_unimod_xref = re.compile(r'unimod:\s*"?\s*(?:unimod:)?\s*(\d+)', re.I)
_quoted_text = re.compile(r'\s*"((?:[^"\\]|\\.)*)"')


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _reference_text(value):
    for attr in ('accession', 'id'):
        text = getattr(value, attr, None)
        if isinstance(text, str):
            return text
    return str(value)


def _xrefs(term, key):
    """Values of `key`, either as parsed by psims or as a raw ``xref`` line."""
    values = [str(v).strip().strip('"') for v in _as_list(term.get(key))]
    prefix = key.lower() + ':'
    for xref in _as_list(term.get('xref')):
        text = str(xref).strip()
        if text.lower().startswith(prefix):
            values.append(text[len(prefix):].strip().strip('"'))
    return values


def _mass(term, key):
    for value in _xrefs(term, key):
        try:
            return float(value)
        except ValueError:
            continue
    return None


def _flag(value):
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return bool(value)


def _unimod_references(term):
    refs = []
    for value in _xrefs(term, 'Unimod'):
        accession = normalize_unimod_accession(value)
        if accession is None:
            match = _unimod_xref.search('Unimod:' + value)
            if match is not None:
                accession = normalize_unimod_accession(match.group(1))
        if accession is not None and accession not in refs:
            refs.append(accession)
    return refs


def _parents(term):
    parents = []
    for value in _as_list(term.get('is_a')):
        match = _psimod_accession.search(_reference_text(value))
        if match is not None and match.group(0) not in parents:
            parents.append(match.group(0))
    return parents


def _remap_id(term):
    for value in _as_list(term.get('replaced_by')):
        match = _psimod_accession.search(_reference_text(value))
        if match is not None:
            return match.group(0)
    for key in ('comment', 'remark'):
        for value in _as_list(term.get(key)):
            match = _remap_note.search(str(value))
            if match is not None:
                return match.group(1)
    return None


def _definition(term):
    definition = term.get('def')
    if definition is None:
        definition = term.get('definition')
    if definition is None:
        return None
    text = str(definition)
    match = _quoted_text.match(text)
    if match is not None:
        return match.group(1).replace('\\"', '"')
    return text


def _specificities(term):
    # residue-level terms carry TermSpec "none"
    positions = [p for p in _xrefs(term, 'TermSpec') if p and p.lower() != 'none'] or ['Anywhere']
    specs = []
    for origin in _xrefs(term, 'Origin'):
        for site in origin.split(','):
            site = site.strip()
            if not site or site.lower() == 'none':
                continue
            for position in positions:
                spec = Specificity(site, position)
                if spec not in specs:
                    specs.append(spec)
    return specs


def term_to_ptm(term):
    """Convert a single PSI-MOD term mapping to a :py:class:`~modreader.model.PSIModPTM`."""
    return PSIModPTM(
        str(term['id']),
        term.get('name'),
        description=_definition(term),
        mono_delta_mass=_mass(term, 'DiffMono'),
        avg_delta_mass=_mass(term, 'DiffAvg'),
        specificities=_specificities(term),
        unimod_references=_unimod_references(term),
        obsolete=_flag(term.get('is_obsolete', False)),
        remap_id=_remap_id(term),
        parents=_parents(term))


class PSIModIndex(OntologyIndex):
    """Index of PSI-MOD terms, keyed by ``MOD:nnnnn`` accession."""
    name = 'PSI-MOD'

    @classmethod
    def from_terms(cls, terms):
        """Build the index from an iterable of term mappings (dicts or
        :py:mod:`psims` entities). Only terms with a ``MOD:`` accession are kept."""
        ptms = []
        for term in terms:
            accession = term.get('id')
            if accession is None or not str(accession).startswith('MOD:'):
                continue
            ptms.append(term_to_ptm(term))
        return cls(ptms)

    @classmethod
    def from_vocabulary(cls, cv):
        """Build the index from a loaded :py:class:`psims.controlled_vocabulary.ControlledVocabulary`."""
        try:
            return cls.from_terms(cv.terms.values())
        except DataAccessError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error('Could not convert PSI-MOD terms', exc_info=True)
            raise DataAccessError('Exception while trying to convert PSI-MOD terms', e) from e

    @classmethod
    def from_obo(cls, source):
        """Read a PSI-MOD OBO file.

        Parameters
        ----------
        source : str or file
            A path or a binary file object.

        Raises
        ------
        DataAccessError
            If the file cannot be read or parsed.
        """
        try:
            if isinstance(source, str):
                with open(source, 'rb') as handle:
                    cv = ControlledVocabulary.from_obo(handle)
            else:
                cv = ControlledVocabulary.from_obo(source)
        except Exception as e:
            logger.error('Could not read PSI-MOD from %r', source, exc_info=True)
            raise DataAccessError('Exception while trying to read PSI-MOD from {!r}'.format(source), e) from e
        return cls.from_vocabulary(cv)

    @classmethod
    def from_psims(cls):
        """Load PSI-MOD through the :py:mod:`psims` vocabulary cache."""
        try:
            cv = load_psimod()
        except Exception as e:
            logger.error('Could not load PSI-MOD', exc_info=True)
            raise DataAccessError('Exception while trying to load PSI-MOD', e) from e
        return cls.from_vocabulary(cv)
