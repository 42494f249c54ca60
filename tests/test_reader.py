from os import path
import modreader
modreader.__path__ = [path.abspath(path.join(path.dirname(__file__), path.pardir, 'modreader'))]
import unittest
import warnings
from modreader.reader import ModReader
from modreader.model import Specificity, UnimodPTM, PSIModPTM, MSModification
from modreader.unimod import UnimodIndex
from modreader.psimod import PSIModIndex
from modreader.pridemod import PRIDEModIndex
from modreader.auxiliary import DataAccessError
from data import reader, unimod_xml, pridemod_xml, psimod_obo


def accessions(ptms):
    return [ptm.accession for ptm in ptms]


class LookupTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.reader = reader()

    def test_by_accession(self):
        for ptm in self.reader.unimod:
            self.assertIs(self.reader.get_ptm_by_accession(ptm.accession), ptm)
        for ptm in self.reader.psimod:
            self.assertIs(self.reader.get_ptm_by_accession(ptm.accession), ptm)
        self.assertIs(self.reader.get_ptm_by_accession('Unimod:35'), self.reader.unimod['UNIMOD:35'])
        self.assertIs(self.reader.get_ptm_by_accession('mod:00719'), self.reader.psimod['MOD:00719'])
        self.assertIsInstance(self.reader.get_ptm_by_accession('MS:1001524'), MSModification)

    def test_unknown_accession(self):
        for accession in ['UNIMOD:99999', 'MOD:99999', 'MS:0000000', 'PRDMOD:1', 'CHEMOD:15.99', 'XLMOD:1', '', None]:
            self.assertIsNone(self.reader.get_ptm_by_accession(accession))

    def test_name_searches_concatenate(self):
        self.assertEqual(accessions(self.reader.get_ptm_list_by_pattern_name('Oxidation')), ['UNIMOD:35'])
        self.assertEqual(accessions(self.reader.get_ptm_list_by_pattern_name('acetyl')),
                         ['MOD:00064', 'MOD:00408'])
        self.assertEqual(accessions(self.reader.get_ptm_list_by_equal_name('duplicated name')),
                         ['MOD:01050', 'MOD:01051'])
        self.assertEqual(accessions(self.reader.get_ptm_list_by_pattern_description('Acetylation')),
                         ['UNIMOD:1', 'MOD:00064', 'MOD:00408'])
        self.assertEqual(self.reader.get_ptm_list_by_pattern_name('no such thing'), [])

    def test_mass_searches_keep_duplicates(self):
        self.assertEqual(accessions(self.reader.get_ptm_list_by_mono_delta_mass(15.994915)),
                         ['UNIMOD:35', 'MOD:00719'])
        self.assertEqual(accessions(self.reader.get_ptm_list_by_mono_delta_mass(42.010565)),
                         ['UNIMOD:1', 'MOD:00064', 'MOD:00408'])
        self.assertEqual(self.reader.get_ptm_list_by_mono_delta_mass(15.99), [])
        self.assertEqual(accessions(self.reader.get_ptm_list_by_mono_delta_mass(15.99, 0.01)),
                         ['UNIMOD:35', 'MOD:00719'])
        self.assertEqual(self.reader.get_ptm_list_by_mono_delta_mass(None), [])
        self.assertEqual(accessions(self.reader.get_ptm_list_by_avg_delta_mass(16.0, 0.0005)), ['MOD:00719'])
        self.assertEqual(self.reader.get_ptm_list_by_avg_delta_mass(None), [])

    def test_specificity(self):
        self.assertEqual(accessions(self.reader.get_ptm_list_by_specificity(Specificity('S'))),
                         ['UNIMOD:21', 'MOD:00046'])
        self.assertEqual(accessions(self.reader.get_ptm_list_by_specificity(Specificity('N-term', 'Protein'))),
                         ['UNIMOD:1'])

    def test_unimod_ptms(self):
        self.assertEqual(self.reader.get_unimod_ptms(), self.reader.unimod.ptms)


class AnchorTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.reader = reader()

    def test_seed_on_site(self):
        result = self.reader.get_anchor_modification('UNIMOD:35', site='M')
        self.assertIn(self.reader.unimod['UNIMOD:35'], result)
        self.assertEqual(self.reader.get_anchor_modification('UNIMOD:35', site='K'), [])

    def test_remapped(self):
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:00719')), ['UNIMOD:35'])
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:01001', site='M')), ['UNIMOD:35'])
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:01010')), ['UNIMOD:21', 'UNIMOD:34'])
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:01010', site='R')), ['UNIMOD:34'])

    def test_unknown(self):
        self.assertEqual(self.reader.get_anchor_modification('MOD:99999'), [])
        self.assertEqual(self.reader.get_anchor_modification('FOO:1', site='M'), [])
        self.assertEqual(self.reader.get_anchor_modification('MOD:99999', by_mass=True), [])

    def test_by_mass(self):
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:00408', by_mass=True)),
                         ['MOD:00408', 'UNIMOD:1'])
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:00408', site='K', by_mass=True)),
                         ['UNIMOD:1'])
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:00408', position='N-term')),
                         ['MOD:00408'])

    def test_by_mass_falls_back_to_seed(self):
        # no mass at all
        self.assertEqual(accessions(self.reader.get_anchor_modification('MOD:00000', by_mass=True)),
                         ['MOD:00000'])

    def test_position(self):
        self.assertEqual(accessions(self.reader.get_anchor_modification('UNIMOD:1', 'N-term', 'Protein N-term')),
                         ['UNIMOD:1'])
        self.assertEqual(self.reader.get_anchor_modification('UNIMOD:1', 'K', 'N-term'), [])
        self.assertEqual(accessions(self.reader.get_anchor_modification('UNIMOD:1', position='N-term')),
                         ['UNIMOD:1'])

    def test_mass_anchor(self):
        self.assertEqual(accessions(self.reader.get_anchor_mass_modification(15.994915)), ['UNIMOD:35'])
        self.assertEqual(accessions(self.reader.get_anchor_mass_modification(16.0, 0.01, site='M')),
                         ['UNIMOD:35'])
        self.assertEqual(self.reader.get_anchor_mass_modification(16.0, 0.01, site='S'), [])
        self.assertEqual(accessions(self.reader.get_anchor_mass_modification(42.010565, position='N-term')),
                         ['MOD:00408', 'UNIMOD:1'])
        self.assertEqual(self.reader.get_anchor_mass_modification(1000.0), [])
        self.assertEqual(self.reader.get_anchor_mass_modification(None), [])

    def test_wrong_annotated(self):
        for accession, site in [('UNIMOD:35', 'M'), ('UNIMOD:35', 'K'), ('MOD:00719', 'M'),
                                ('MOD:00046', 'T'), ('MOD:00046', 'C'), ('MOD:99999', 'M')]:
            self.assertEqual(self.reader.is_wrong_annotated(accession, site),
                             not self.reader.get_anchor_modification(accession, site=site))
        self.assertFalse(self.reader.is_wrong_annotated('UNIMOD:35', 'M'))
        self.assertTrue(self.reader.is_wrong_annotated('UNIMOD:35', 'K'))
        self.assertFalse(self.reader.is_wrong_annotated('MOD:00046', 'T'))

    def test_spec_example(self):
        unimod = UnimodIndex([UnimodPTM('UNIMOD:35', 'Oxidation', mono_delta_mass=15.9949,
                                        specificities=[Specificity('M', 'Anywhere')])])
        psimod = PSIModIndex([
            PSIModPTM('MOD:00100', 'old', obsolete=True, remap_id='MOD:00101'),
            PSIModPTM('MOD:00101', 'new', unimod_references=['UNIMOD:35'])])
        custom = ModReader(unimod, psimod, PRIDEModIndex([]))
        self.assertEqual(custom.get_anchor_modification('UNIMOD:35', site='M'), [unimod['UNIMOD:35']])
        self.assertEqual(custom.get_anchor_modification('UNIMOD:35', site='K'), [])
        self.assertEqual(custom.remap([psimod['MOD:00100']]), {unimod['UNIMOD:35']})

    def test_numeric_accession_order(self):
        unimod = UnimodIndex([UnimodPTM('UNIMOD:' + n, 'mod ' + n, mono_delta_mass=1.0) for n in ('100', '21', '4')])
        custom = ModReader(unimod, PSIModIndex([]), PRIDEModIndex([]))
        self.assertEqual(accessions(custom.get_anchor_mass_modification(1.0)),
                         ['UNIMOD:4', 'UNIMOD:21', 'UNIMOD:100'])


class PRIDEModResolutionTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.reader = reader()

    def test_direct(self):
        self.assertEqual(self.reader.get_pridemod_by_accession('UNIMOD:35').accession, 'PRDMOD:1')
        self.assertEqual(self.reader.get_pridemod_by_accession('MOD:00046').accession, 'PRDMOD:2')
        self.assertIsNone(self.reader.get_pridemod_by_accession('UNIMOD:1'))

    def test_unique_mass(self):
        self.assertEqual(self.reader.get_pridemod_by_accession('CHEMOD:15.994915').accession, 'PRDMOD:1')
        self.assertEqual(self.reader.get_pridemod_by_accession('CHEMOD:79.966331', 'S').accession, 'PRDMOD:2')

    def test_ambiguous_mass_not_substituted(self):
        self.assertIsNone(self.reader.get_pridemod_by_accession('CHEMOD:57.021464'))
        self.assertEqual(self.reader.get_pridemod_by_accession('CHEMOD:57.021464', 'C').accession, 'PRDMOD:3')

    def test_unmatched_mass(self):
        self.assertIsNone(self.reader.get_pridemod_by_accession('CHEMOD:34.560056'))
        self.assertIsNone(self.reader.get_pridemod_by_accession('CHEMOD:15.994915', 'K'))
        self.assertIsNone(self.reader.get_pridemod_by_accession('CHEMOD:nan-ish'))

    def test_unique_unimod_accession(self):
        self.assertEqual(self.reader.get_unique_unimod_accession('CHEMOD:15.994915'), 'UNIMOD:35')
        self.assertIsNone(self.reader.get_unique_unimod_accession('CHEMOD:57.021464'))
        self.assertEqual(self.reader.get_unique_unimod_accession('CHEMOD:57.021464', 'K'), 'UNIMOD:1012')
        self.assertIsNone(self.reader.get_unique_unimod_accession('CHEMOD:1.0'))
        self.assertIsNone(self.reader.get_unique_unimod_accession('UNIMOD:35'))


class LoadTest(unittest.TestCase):
    def test_load(self):
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            psimod_missing = path.join(path.dirname(__file__), 'no_such_file.obo')
            self.assertRaises(DataAccessError, ModReader.load, unimod_xml, psimod_missing, pridemod_xml)

    def test_load_obo(self):
        loaded = ModReader.load(unimod_xml, psimod_obo, pridemod_xml)
        self.assertEqual(len(loaded.psimod), 7)
        self.assertEqual(accessions(loaded.get_anchor_modification('MOD:01002', site='M')), ['UNIMOD:35'])

    def test_failure_logged_once(self):
        psimod_missing = path.join(path.dirname(__file__), 'no_such_file.obo')
        with self.assertLogs('modreader', 'ERROR') as logs:
            self.assertRaises(DataAccessError, ModReader.load, unimod_xml, psimod_missing, pridemod_xml)
        self.assertEqual(len(logs.records), 1)

    def test_pridemod_required(self):
        self.assertRaises(DataAccessError, ModReader.load, unimod_xml, None, None)

    def test_missing_unimod(self):
        self.assertRaises(DataAccessError, ModReader.load, 'no_such_unimod.xml', 'x.obo', pridemod_xml)


if __name__ == '__main__':
    unittest.main()
