#!/usr/bin/env python3
"""
Setup script for app-export-tool.
"""

import codecs
import os
import re
from setuptools import setup, find_packages


def read(rel_path):
    """Read file content."""
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r', 'utf-8') as fp:
        return fp.read()


def find_version(rel_path):
    """Extract version from __version__.py file."""
    init_content = read(rel_path)
    version_match = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        init_content,
        re.MULTILINE
    )
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if __name__ == "__main__":
    setup(
        name="app-export-tool",
        version=find_version("app_export/__version__.py"),
        description="Export application descriptors into distributable offline packages",
        packages=find_packages(exclude=["tests*", "docs*", "examples*", "scripts*"]),
        python_requires=">=3.9",
        install_requires=[
            "aiofiles>=23.1",
            "click>=8.1",
            "jsonschema>=4.17",
            "pypinyin>=0.49",
            "PyYAML>=6.0",
            "rich>=13.0",
        ],
        extras_require={
            "test": [
                "pytest>=7.4",
                "pytest-asyncio>=0.21",
            ],
        },
        entry_points={
            "console_scripts": [
                "app-export=app_export.cli.main:main",
            ],
        },
    )
