# setup.py
from setuptools import setup, find_packages

setup(
    name="func-input",
    version="0.1.0",
    description="Partitioned, lazily evaluated data sources generated from a function of the index",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "cloudpickle>=2.2",
        "rocksdict>=0.3.20",
        "setproctitle>=1.3",
        "tqdm>=4.64",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
