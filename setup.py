#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup

readme = open('README.rst').read()
version = (0, 3, 0)

setup(
    name='symops',
    python_requires=">=3.10",
    version=".".join(map(str, version)),
    description='Batch operations on symbolic music events: sorting, clipping and time remapping',
    long_description=readme,
    long_description_content_type='text/x-rst',
    packages=[
        'symops',
    ],
    install_requires=[
        "numpy",
        "quicktions",
        "bpf4>=1.8.4",
        "configdict>=2.10.0",
    ],
    extras_require={
        'test': ['pytest'],
    },
    license="LGPLv2",
    zip_safe=False,
    classifiers=[
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Sound/Audio :: MIDI'
    ],
)
