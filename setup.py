#!/usr/bin/env python3
from setuptools import find_packages, setup

setup(
  name = 'gitmirror',
  use_scm_version = {'fallback_version': '0.1.0'},
  description = 'Keep local directories mirroring remote git repositories',
  python_requires = '>=3.11.0',
  zip_safe = False,
  packages = find_packages(exclude=('tests',)),
  scripts = ['git-mirror'],
  setup_requires = ['setuptools_scm'],
  install_requires = [
    'structlog',
  ],
  extras_require = {
    'test': ['pytest'],
  },
  classifiers = [
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
  ],
)
