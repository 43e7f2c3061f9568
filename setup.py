from setuptools import setup, find_packages
from codecs import open
from os import path


here = path.abspath(path.dirname(__file__))


with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

with open(path.join(here, 'fitcore', '__init__.py')) as pkg:
    __version__ = next(eval(line.split('=')[1]) for line in pkg
                       if line.startswith('__version__'))


setup(
    name='fitcore',
    version=__version__,
    description='Streaming decoder for FIT activity files',
    long_description=long_description,
    author='Jordan Mackie',
    author_email='jmackie@protonmail.com',
    license='MIT',
    keywords='fit ant garmin exercise cycling running decoder',

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Medical Science Apps.',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],

    packages=find_packages(),
    install_requires=[
        'numpy>=1.11.1',
        'pandas>=0.18.1',
        'pytz>=2011',
    ],
    extras_require={
        'test': ['pytest>=3.9'],
    },
    entry_points={
        'console_scripts': [
            'fitcore=fitcore._util.cli:parse',
        ],
    },
)
