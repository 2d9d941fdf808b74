from setuptools import setup, find_packages

setup(
    name='burrow',
    version='1.0.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    description='burrow: autonomous spiral excavation agent with ledger-based return navigation',
    install_requires=[
        'draccus',
        'PyYAML',
        'numpy',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'burrow=burrow.main:main',
        ],
    },
    include_package_data=True,
    python_requires='>=3.9',
)
