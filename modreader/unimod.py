"""
unimod - the Unimod mass dictionary
===================================

This module reads the Unimod XML database (``unimod.xml``) into a
:py:class:`UnimodIndex`. Every ``mod`` element becomes a
:py:class:`~modreader.model.UnimodPTM` with accession ``UNIMOD:<record_id>``.

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
from .model import UnimodPTM, Specificity

logger = logging.getLogger(__name__)

_unimod_xml_download_url = 'http://www.unimod.org/xml/unimod.xml'


def remove_namespace(doc, namespace):
    """Remove namespace in the passed document in place."""
    ns = '{%s}' % namespace
    nsl = len(ns)
    for elem in doc.iter():
        if isinstance(elem.tag, str) and elem.tag.startswith(ns):
            elem.tag = elem.tag[nsl:]


def preprocess_xml(doc_path):
    """
    Parse and drop namespaces from an XML document.

    Parameters
    ----------
    doc_path : str or file

    Returns
    -------
    out : etree.ElementTree
    """
    tree = etree.parse(doc_path)
    root = tree.getroot()
    for ns in root.nsmap.values():
        remove_namespace(tree, ns)
    return tree


def _process_mod(mod):
    d = mod.attrib
    mono = avg = None
    for delta in mod.iterfind('delta'):  # executed 1 time
        mono = delta.get('mono_mass')
        avg = delta.get('avge_mass')
    spec = []
    for sp in mod.iterfind('specificity'):
        spec.append(Specificity(sp.get('site'), sp.get('position')))
    alt_names = [alt.text for alt in mod.iterfind('alt_name') if alt.text]
    return UnimodPTM(
        normalize_unimod_accession(d['record_id']),
        d['title'],
        description=d.get('full_name'),
        mono_delta_mass=mono,
        avg_delta_mass=avg,
        specificities=spec,
        approved=d.get('approved', '1') == '1',
        alt_names=alt_names)


class UnimodIndex(OntologyIndex):
    """Index of the Unimod modifications, keyed by ``UNIMOD:<n>`` accession.

    Lookups accept any accession spelling understood by
    :py:func:`~modreader.auxiliary.normalize_unimod_accession`.
    """
    name = 'Unimod'

    def get(self, accession, default=None):
        key = normalize_unimod_accession(accession)
        if key is None:
            return default
        return super(UnimodIndex, self).get(key, default)

    by_accession = get

    def __getitem__(self, accession):
        key = normalize_unimod_accession(accession)
        if key is None:
            raise KeyError(accession)
        return super(UnimodIndex, self).__getitem__(key)

    def __contains__(self, accession):
        return self.get(accession) is not None

    @classmethod
    def from_xml(cls, source=_unimod_xml_download_url):
        """Read a Unimod XML file.

        Parameters
        ----------
        source : str or file, optional
            A path, URL or file-like object. Defaults to the Unimod download URL.

        Returns
        -------
        out : UnimodIndex

        Raises
        ------
        DataAccessError
            If the file cannot be read or parsed.
        """
        try:
            tree = preprocess_xml(source)
            ptms = [_process_mod(mod) for mod in tree.iterfind('.//modifications/mod')]
        except (IOError, OSError, etree.Error, KeyError, ValueError) as e:
            logger.error('Could not read Unimod from %r', source, exc_info=True)
            raise DataAccessError('Exception while trying to read Unimod from {!r}'.format(source), e) from e
        logger.debug('Read %d Unimod modifications', len(ptms))
        return cls(ptms)
