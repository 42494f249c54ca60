"""
version - modreader version information
=======================================

  :py:const:`version` - a string with the current version.

  :py:const:`version_info` - the version as a tuple of ints, for comparisons.
"""

__version__ = '0.3.0'

version = __version__
version_info = tuple(int(part) for part in __version__.split('.'))
