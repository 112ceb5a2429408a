import os

from setuptools import setup, find_packages

VERSION = '0.1.0'
DESCRIPTION = 'Google Drive storage backend for the syncmarx bookmark sync client'
LONG_DESCRIPTION = ('This package provides the remote storage adapter used by syncmarx: '
                    'OAuth token refresh, resumable uploads to the Drive application folder, '
                    'and optional compressed/encrypted payloads.')

# Read requirements.txt next to this file, skipping comments and empty lines
REQUIREMENTS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'requirements.txt')
try:
    with open(REQUIREMENTS_PATH, encoding='utf-8') as f:
        install_requires = [line.strip() for line in f if line.strip() and not line.startswith('#')]
except FileNotFoundError:
    install_requires = ['requests', 'cryptography', 'click']

setup(
    name='syncmarx-storage',
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    packages=find_packages(include=['syncmarx', 'syncmarx.*']),
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'syncmarx = syncmarx.cli.main:syncmarx',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Topic :: Internet',
    ],
    python_requires='>=3.8',
)
