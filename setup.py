"""
elex setup: elex is a library for extracting ELAN (.eaf) annotations
into tables for statistical analysis
"""

from setuptools import setup, find_packages
import glob
import os

REQS = [
    'tabulate',
    'pandas >= 1.1',
]


setup(name='elex',
      version='0.3',
      description='Flat annotation tables from ELAN (.eaf) files',
      packages=find_packages(),
      scripts=[f for f in glob.glob('scripts/*') if not os.path.isdir(f)],
      python_requires='>=3.6',
      install_requires=REQS,
      extras_require={'test': ['pytest']})
