#!/usr/bin/env python

from setuptools import setup


setup(
    name='fitsheader',
    version='1.0.0',
    description='Ordered FITS header blocks with a dictionary view of '
                'multi-card values',
    classifiers=[
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Astronomy',
    ],
    package_dir={'': 'lib'},
    packages=['fitsheader', 'fitsheader.tests'],
    package_data={'fitsheader.tests': ['data/*.fits']},
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.6',
    zip_safe=False
)
