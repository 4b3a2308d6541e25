from setuptools import setup

setup(
    name='ecodiversity',
    version='0.1.0',
    packages=['ecodiversity', 'ecodiversity.algos', 'ecodiversity.metrics', 'ecodiversity.tools'],
    description='Similarity-sensitive and partitioned diversity measures for ecological communities',
    license='GNU AGPLv3',
    python_requires='>=3.9',
    install_requires=[
        'matplotlib',
        'numba',
        'numpy',
        'scikit-learn',
    ],
    extras_require={
        'test': [
            'pytest',
            'scipy',
        ],
    },
)
