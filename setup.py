# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
import os
from setuptools import setup, find_packages

version = '0.1.0'

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.rst')) as f:
    README = f.read()

setup(name='cefevent-py',
      version=version,
      description="Common Event Format (CEF) event logging",
      long_description=README,
      classifiers=[
          'License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)',
          'Programming Language :: Python :: 3',
          'Topic :: Security',
          'Topic :: System :: Logging',
          ],
      keywords='cef siem security logging arcsight',
      license='MPLv2.0',
      packages=find_packages(exclude=['ez_setup', 'examples']),
      include_package_data=True,
      zip_safe=False,
      python_requires='>=3.7',
      install_requires=[
          # -*- Extra requirements: -*-
          'docopt',
          ],
      extras_require={
          'test': ['pytest', 'mock'],
          },
      entry_points={
          'console_scripts': [
              'cefevent = cefevent.command:run',
              ],
          },
      )
