from setuptools import setup, find_packages

setup(
    install_requires=[
        'google-auth >= 1.32.1',
        'pydantic >= 2.0',
        'pytz >= 2019.1',
        'requests >= 2.25.1',
    ],
    extras_require={
        'test': [
            'pytest >= 6.2.4',
            'pytest-mock >= 3.6.1',
        ],
    },
    name='bigquery-rest-client',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    version='0.1.0',
)
