#!/usr/bin/env python
# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Python setuptools setup for mllib"""

from setuptools import setup, find_packages
import sys


if sys.version_info[:2] < (3, 8):
    raise RuntimeError("mllib requires Python 3.8 or higher")

# Notes on the setup
# Version scheme is: major.minor.patch<suffix>

# define the setup
def setup_package():
    setup(name='mllib',
          version='0.1.0',
          license='MIT License',
          description='Machine learning objects driven by messages',
          long_description=
              "mllib provides machine learning objects (support vector "
              "machines, hidden Markov models, nearest neighbours, decision "
              "trees and others) which are trained and queried through "
              "messages, as sent by a patch of a real-time multimedia "
              "environment. Objects record training data, persist data and "
              "models to files and report results through outlets.",
          # please maintain alphanumeric order
          packages=find_packages(include=['mllib', 'mllib.*']),
          install_requires=['hmmlearn>=0.3',
                            'numpy',
                            'scikit-learn>=1.0',
                            'scipy',
                            ],
          extras_require={'tests': ['pytest']},
          entry_points={
              'console_scripts': ['mllib=mllib.cmdline.main:main'],
              },
          )


if __name__ == '__main__':
    setup_package()
