from setuptools import setup, find_packages

setup(
    name='credativ-tsql-converter',
    version='0.1.0',
    url='https://github.com/credativ/credativ-tsql-converter.git',
    author='Josef Machytka',
    author_email='josef.machytka@credativ.de',
    description='Converter of T-SQL (MSSQL) queries into PostgreSQL',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=['pyyaml', 'sqlglot'],
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['credativ-tsql-converter = credativ_tsql_converter:main']},
)
