from os import path
import modreader
modreader.__path__ = [path.abspath(path.join(path.dirname(__file__), path.pardir, 'modreader'))]
import unittest
import warnings
from modreader.remap import Remapper
from modreader.model import PSIModPTM, UnimodPTM, PTM, MSModification
from modreader.psimod import PSIModIndex
from modreader.auxiliary import RemapWarning
from data import unimod_index, psimod_index


class RemapTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.unimod = unimod_index()
        cls.psimod = psimod_index()

    def setUp(self):
        self.remapper = Remapper(self.unimod, self.psimod)

    def remap(self, *accessions):
        return {ptm.accession for ptm in self.remapper.remap(
            [self.psimod.get(a) or self.unimod.get(a) for a in accessions])}

    def test_non_psimod_kept(self):
        ptms = [self.unimod['UNIMOD:35'], MSModification.get_by_accession('MS:1001524'), PTM('X:1', 'other')]
        self.assertEqual(self.remapper.remap(ptms), set(ptms))

    def test_cross_reference(self):
        self.assertEqual(self.remapper.remap([self.psimod['MOD:00719']]), {self.unimod['UNIMOD:35']})

    def test_dangling_reference_dropped(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            self.assertEqual(self.remap('MOD:01040'), set())
            self.assertEqual(self.remap('MOD:01041'), {'UNIMOD:35'})

    def test_obsolete_chain(self):
        result = self.remapper.remap([self.psimod['MOD:01001']])
        self.assertEqual(result, {self.unimod['UNIMOD:35']})
        self.assertNotIn(self.psimod['MOD:01001'], result)

    def test_obsolete_chain_without_reference(self):
        self.assertEqual(self.remap('MOD:01003'), set())

    def test_obsolete_dead_end_kept(self):
        self.assertEqual(self.remap('MOD:01004'), {'MOD:01004'})

    def test_obsolete_loop(self):
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            self.assertEqual(self.remap('MOD:01005'), set())
        self.assertTrue(any(issubclass(x.category, RemapWarning) for x in w))

    def test_obsolete_missing_target(self):
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            self.assertEqual(self.remap('MOD:01007'), set())
        self.assertTrue(any(issubclass(x.category, RemapWarning) for x in w))

    def test_obsolete_chain_depth_bound(self):
        remapper = Remapper(self.unimod, self.psimod, max_depth=1)
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            self.assertEqual(remapper.remap([self.psimod['MOD:01001']]), set())
        self.assertTrue(any(issubclass(x.category, RemapWarning) for x in w))

    def test_plain_term_kept(self):
        ptm = self.psimod['MOD:00000']
        self.assertEqual(self.remapper.remap([ptm]), {ptm})

    def test_parents_all_branches(self):
        self.assertEqual(self.remap('MOD:01010'), {'UNIMOD:21', 'UNIMOD:34'})

    def test_parents_without_mapping(self):
        self.assertEqual(self.remap('MOD:01020'), {'MOD:01020'})
        self.assertEqual(self.remap('MOD:00709'), {'MOD:00709'})

    def test_parent_loop(self):
        self.assertEqual(self.remap('MOD:01030'), {'MOD:01030'})

    def test_parent_depth_bound(self):
        terms = [{'id': 'MOD:03000', 'name': 'top', 'Unimod': 'Unimod:35'}]
        for i in range(1, 6):
            terms.append({'id': 'MOD:%05d' % (3000 + i), 'name': 'level %d' % i,
                          'is_a': 'MOD:%05d' % (3000 + i - 1)})
        psimod = PSIModIndex.from_terms(terms)
        deep = psimod['MOD:03005']
        self.assertEqual(Remapper(self.unimod, psimod).remap([deep]), {self.unimod['UNIMOD:35']})
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            self.assertEqual(Remapper(self.unimod, psimod, max_depth=2).remap([deep]), {deep})
        self.assertTrue(any(issubclass(x.category, RemapWarning) for x in w))

    def test_deduplication(self):
        result = self.remapper.remap([self.psimod['MOD:00719'], self.psimod['MOD:01041'],
                                      self.unimod['UNIMOD:35'], self.psimod['MOD:01001']])
        self.assertEqual(result, {self.unimod['UNIMOD:35']})

    def test_idempotent(self):
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            everything = self.psimod.ptms + self.unimod.ptms
            once = self.remapper.remap(everything)
            self.assertEqual(self.remapper.remap(once), once)
            for ptm in everything:
                single = self.remapper.remap([ptm])
                self.assertEqual(self.remapper.remap(single), single)

    def test_call(self):
        self.assertEqual(self.remapper([self.psimod['MOD:00046']]), {self.unimod['UNIMOD:21']})

    def test_spec_example(self):
        unimod = modreader.UnimodIndex([UnimodPTM('UNIMOD:35', 'Oxidation', mono_delta_mass=15.9949)])
        psimod = PSIModIndex([
            PSIModPTM('MOD:00100', 'old', obsolete=True, remap_id='MOD:00101'),
            PSIModPTM('MOD:00101', 'new', unimod_references=['UNIMOD:35'])])
        self.assertEqual(Remapper(unimod, psimod).remap([psimod['MOD:00100']]), {unimod['UNIMOD:35']})


if __name__ == '__main__':
    unittest.main()
