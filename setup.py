"""
Packaging for office-url. The tests live beside the modules under src/ and are run with

    pytest src --doctest-modules
"""

from setuptools import setup


setup(
    name='office-url',
    version='0.0.1',
    description='Parses and builds the connection urls used to reach an office process over a pipe or socket.',
    url='',
    author='',
    author_email='',
    license='Apache-2.0',
    package_dir={'': 'src'},
    packages=['officeurl', 'officeurl.config', 'officeurl.support'],
    package_data={'officeurl.config': ['*.cfg']},
    python_requires='>=3.6',
    install_requires=[
        'configobj>=5.0.6',
    ],
    extras_require={
        'test': ['pytest', 'PyHamcrest'],
    },
    zip_safe=False,
)
