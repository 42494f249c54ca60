"""
remap - map modifications onto Unimod
=====================================

Many consumers only understand Unimod accessions, while PSI-MOD is richer
and more current. :py:class:`Remapper` normalizes a list of modifications
into the smallest set of records that such consumers can use:

  1. Anything that is not a PSI-MOD term is kept as it is.
  2. A PSI-MOD term with Unimod cross-references is replaced by the referenced
     Unimod records. References that are not in the Unimod index are dropped.
  3. An obsolete PSI-MOD term with a replacement is followed along the
     replacement chain to the current term, which is then mapped as in 2.
  4. A PSI-MOD term with ``is_a`` parents is replaced by whatever its
     ancestors map to. All parents are explored; a branch is not descended
     further once it maps. If no ancestor maps, the term is kept.
  5. Any other term is kept.

The result is deduplicated.

PSI-MOD is assumed to be acyclic, but this is not checked by the ontology
itself, so every walk keeps track of visited accessions and is limited to
:py:data:`DEFAULT_MAX_DEPTH` steps. A walk that loops, runs too deep or hits a
missing term issues a :py:class:`~modreader.auxiliary.RemapWarning` and
contributes nothing.
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

import warnings

from .auxiliary import RemapWarning
from .model import PSIModPTM

DEFAULT_MAX_DEPTH = 64


class Remapper(object):
    """Remaps modifications onto Unimod using a Unimod and a PSI-MOD index.

    Parameters
    ----------
    unimod : :py:class:`~modreader.unimod.UnimodIndex`
    psimod : :py:class:`~modreader.psimod.PSIModIndex`
    max_depth : int, optional
        Maximum number of steps along an obsolete chain or up the parent
        hierarchy. Defaults to :py:data:`DEFAULT_MAX_DEPTH`.
    """

    def __init__(self, unimod, psimod, max_depth=DEFAULT_MAX_DEPTH):
        self.unimod = unimod
        self.psimod = psimod
        self.max_depth = max_depth

    def remap(self, ptms):
        """Map all modifications in `ptms` onto Unimod where possible.

        Parameters
        ----------
        ptms : iterable of :py:class:`~modreader.model.PTM`

        Returns
        -------
        out : set
            Unimod records and the records that could not be mapped.
        """
        result = []
        for ptm in ptms:
            if not isinstance(ptm, PSIModPTM):
                result.append(ptm)
            elif ptm.unimod_references:
                result.extend(self.to_unimod(ptm))
            elif ptm.obsolete and ptm.remap_id:
                current = self.follow_obsolete(ptm)
                if current is not None and current.unimod_references:
                    result.extend(self.to_unimod(current))
            elif ptm.parents:
                mapped = self.remap_parents(ptm)
                if mapped:
                    result.extend(mapped)
                else:
                    result.append(ptm)
            else:
                result.append(ptm)
        return set(result)

    __call__ = remap

    def to_unimod(self, ptm):
        """The Unimod records referenced by a PSI-MOD term. Dangling references are skipped."""
        result = []
        for accession in ptm.unimod_references:
            unimod_ptm = self.unimod.get(accession)
            if unimod_ptm is not None:
                result.append(unimod_ptm)
        return result

    def follow_obsolete(self, ptm):
        """Follow the replacement chain of an obsolete term.

        Returns
        -------
        out : PSIModPTM or None
            The first term of the chain that is not obsolete or has no
            replacement, or :py:const:`None` if the chain is broken.
        """
        seen = {ptm.accession}
        current = ptm
        while current.obsolete and current.remap_id:
            if len(seen) > self.max_depth:
                warnings.warn('Obsolete chain of {} is longer than {} terms'.format(
                    ptm.accession, self.max_depth), RemapWarning)
                return None
            successor = self.psimod.get(current.remap_id)
            if successor is None:
                warnings.warn('{} is remapped to {}, which is not in {}'.format(
                    current.accession, current.remap_id, self.psimod.name), RemapWarning)
                return None
            if successor.accession in seen:
                warnings.warn('Obsolete chain of {} loops at {}'.format(
                    ptm.accession, successor.accession), RemapWarning)
                return None
            seen.add(successor.accession)
            current = successor
        return current

    def remap_parents(self, ptm):
        """Collect the Unimod records that the ancestors of `ptm` map to."""
        return self._walk_parents(ptm, {ptm.accession}, 0)

    def _walk_parents(self, ptm, visited, depth):
        if depth >= self.max_depth:
            warnings.warn('Parent hierarchy above {} is deeper than {} levels'.format(
                ptm.accession, self.max_depth), RemapWarning)
            return []
        result = []
        for accession in ptm.parents:
            # diamonds are common in PSI-MOD, a revisit is not an error
            if accession in visited:
                continue
            visited.add(accession)
            parent = self.psimod.get(accession)
            if parent is None:
                warnings.warn('{} has parent {}, which is not in {}'.format(
                    ptm.accession, accession, self.psimod.name), RemapWarning)
                continue
            if parent.unimod_references:
                result.extend(self.to_unimod(parent))
            elif parent.parents:
                result.extend(self._walk_parents(parent, visited, depth + 1))
        return result
