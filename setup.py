#  -*- coding: utf-8 -*-
"""
Setuptools script for the dlnacast project.
"""

import os
from textwrap import fill, dedent

from setuptools import setup, find_packages


def required(fname):
    with open(os.path.join(os.path.dirname(__file__), fname)) as f:
        return [line.strip() for line in f if line.strip()]


setup(
    name="dlnacast",
    version="0.1.0",
    packages=find_packages(
        exclude=[
            "*.tests",
            "*.tests.*",
            "tests.*",
            "tests",
            "*.examples",
            "*.examples.*",
            "examples.*",
            "examples"
        ]
    ),
    scripts=[],
    include_package_data=True,
    python_requires=">=3.7",
    install_requires=required('requirements.txt'),
    extras_require={
        "test": ["pytest", "mock"],
    },
    zip_safe=False,
    # Metadata for upload to PyPI
    description=fill(dedent("""\
        Discover UPnP/DLNA media renderers and play media URLs on them.
    """)),
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Communications",
        "Topic :: Multimedia :: Video",
        "Topic :: System :: Networking"
    ],
    license="MIT",
    keywords="upnp dlna ssdp avtransport",
)
