#!/usr/bin/env python

'''
setup.py file for modreader
'''

from setuptools import setup
import re
import os


# from https://packaging.python.org/guides/single-sourcing-package-version/

def read(rel_path):
    here = os.path.abspath(os.path.dirname(__file__))
    with open(os.path.join(here, rel_path), 'r') as fp:
        return fp.read()


def get_version(rel_path):
    for line in read(rel_path).splitlines():
        if line.startswith('__version__'):
            delim = '"' if '"' in line else "'"
            return line.split(delim)[1]
    else:
        raise RuntimeError("Unable to find version string.")


long_description = re.sub(r':py:\w+:`([^`]+)`',
        lambda m: '**{}**'.format(m.group(1)),
        read('README.rst') + '\n' + read('INSTALL'))


extras_require = {'test': ['pytest']}


setup(
    name               = 'modreader',
    version            = get_version('modreader/version.py'),
    description        = 'Lookup and remapping of protein modifications across Unimod, PSI-MOD and PRIDE Mod.',
    long_description   = long_description,
    author             = 'modreader developers',
    packages           = ['modreader', 'modreader.auxiliary'],
    python_requires    = '>=3.7',
    install_requires   = ['lxml', 'numpy', 'psims'],
    extras_require     = extras_require,
    classifiers        = ['Intended Audience :: Science/Research',
                          'Programming Language :: Python :: 3',
                          'Topic :: Scientific/Engineering :: Bio-Informatics',
                          'Topic :: Scientific/Engineering :: Chemistry',
                          'Topic :: Software Development :: Libraries'],
    license            = 'License :: OSI Approved :: Apache Software License',
    zip_safe           = False,
    )
