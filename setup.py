#!/usr/bin/env python
"""Setup script for bioattr. This is boilerplate, except that dependencies are
trimmed on the readthedocs server, where compiled dependencies are mocked.
"""
import os
from setuptools import setup, find_packages

bioattr_version = "0.1.0"


#===============================================================================
# Package metadata
#===============================================================================

with open("README.rst") as f:
    long_description = f.read()

# trim dependencies if on readthedocs server, where many dependencies are mocked
on_rtd = os.environ.get("READTHEDOCS", None) == "True"

if not on_rtd:
    install_requires = [
        "numpy>=1.17.0",
        "pysam>=0.15.0",
        "termcolor",
    ]
else:
    install_requires = ["numpy", "termcolor"]

tests_require = [
    "pytest>=6.0",
]


#===============================================================================
# Program body
#===============================================================================

setup(

    name             = "bioattr",
    version          = bioattr_version,
    long_description =  long_description,
    long_description_content_type = "text/x-rst",

    description      = "Typed optional attributes for PAF, GFA and VCF records",
    license          = "BSD 3-Clause",
    keywords         = "bioinformatics PAF GFA VCF tags attributes parser sequencing genomics",
    platforms        = "OS Independent",

    classifiers      = [
         'Development Status :: 3 - Alpha',
         'Programming Language :: Python :: 3',

         'Topic :: Scientific/Engineering :: Bio-Informatics',
         'Topic :: Software Development :: Libraries',

         'Intended Audience :: Science/Research',
         'Intended Audience :: Developers',

         'License :: OSI Approved :: BSD License',
         'Operating System :: POSIX',
         'Natural Language :: English',
    ],

    zip_safe = False,
    packages = find_packages(include=["bioattr","bioattr.*"]),

    python_requires  = ">=3.6",
    install_requires = install_requires,
    extras_require   = {
        "test" : tests_require,
    },

) # yapf: disable
