#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="extradist",
    version="0.1.0",
    description="Vectorized density, cdf, quantile and random generation for additional probability distributions",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # finds extradist/ and its subpackages, but not tests or docs
    packages=find_packages(exclude=["tests*", "docs*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],

    include_package_data=False,
)
