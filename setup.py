import glob
import os

from setuptools import find_packages, setup

top_level_modules = [os.path.splitext(os.path.basename(p))[0] for p in glob.glob('src/*.py') if not p.endswith('__init__.py')]

setup(
    name='notion_table_sync',
    version='0.1.0',
    packages=find_packages(where='src', exclude=['tests', 'tests.*']),
    package_dir={'': 'src'},
    py_modules=top_level_modules,
    include_package_data=True,
    description='Mirror a Notion database into a local table view and write cell edits back',
    python_requires='>=3.10',
    install_requires=[
        'loguru>=0.7',
        'pandas>=2.0',
        'pydantic>=2.5',
        'requests>=2.31',
    ],
    extras_require={
        'test': ['pytest>=7.4'],
    },
    entry_points={
        'console_scripts': ['notion-table-sync=main:run'],
    },
)
