#!/usr/bin/env python

from setuptools import setup
import re

with open('src/areaview/__init__.py') as f:
  version = re.search(r"^__version__\s*=\s*'([^']+)'", f.read(), re.M).group(1)

setup(name='areaview',
      version=version,
      description='Maps IPv4 addresses to named areas (DNS views) by longest-prefix match over a binary trie of subnets',
      author='Steve Benson',
      author_email='steve@rhythm.cx',
      license='New-style BSD',
      package_dir={'': 'src'},
      packages=['areaview'],
      python_requires='>=3.7',
      extras_require={'test': ['pytest']},
      entry_points={'console_scripts': ['areaview = areaview.cli:main']},
     )
