################################################################################
#                                                                              #
#   This file is part of the liegroups library                                 #
#       see $LIEGROUPS/README.md                                               #
#                                                                              #
#   Copyright (C) 2025 Zuse Institute Berlin                                   #
#                                                                              #
#   liegroups is distributed under the terms of the MIT License.               #
#       see $LIEGROUPS/LICENSE                                                 #
#                                                                              #
################################################################################

from setuptools import setup

# read the contents of your README file
from pathlib import Path
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
  name = 'liegroups',
  packages = ['liegroups',
              'liegroups.groups',
              'liegroups.manifold'],
  version = '0.1',
  license='MIT License',
  description = 'Generic Lie group operations with identity-aware dispatch and power groups',
  long_description=long_description,
  long_description_content_type='text/markdown',
  author = 'Zuse Institute Berlin',
  keywords = ['Lie Groups', 'Lie Algebras', 'Rigid Motions', 'Geometric Computing'],
  install_requires=[
          'jax>=0.4.34',
          'jaxlib>=0.4.34',
          'numpy',
          'scipy'
      ],
  extras_require = {'test': ['pytest']},
  classifiers=[
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Developers',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3.10',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12'
  ],
)
