#!/usr/bin/env python3
"""
Setup script for cfgtree - a strongly-typed configuration value engine.

This package loads TOML, JSON, YAML and libconfig documents into a single
hierarchical value tree with checked numeric conversions, RFC 3339 date/time
types and wildcard key matching.
"""

from setuptools import setup, find_packages
import os

# Read the README file for long description
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "cfgtree - Strongly-typed configuration trees for TOML, JSON, YAML and libconfig"

setup(
    name="cfgtree",
    version="1.0.0",
    author="cfgtree Development Team",
    author_email="cfgtree-dev@example.com",
    description="Strongly-typed configuration trees for TOML, JSON, YAML and libconfig",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    url="https://github.com/cfgtree-dev/cfgtree",
    packages=find_packages(exclude=['tests*', 'docs*', 'tools*', 'venv*']),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=[
        # Core dependencies that are always needed
        "PyYAML>=6.0.1",
        "tomlkit>=0.12.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.3.4",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
            "vulture>=2.7.0",
            "bandit>=1.7.0",
            "types-PyYAML>=6.0.0",
        ],
        "test": [
            "pytest>=8.3.4",
        ],
        "libconfig": [
            "libconf>=2.0.1",
        ],
        "all": [
            "libconf>=2.0.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "cfgtree-convert=cfgtree.cli.convert:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="configuration, toml, json, yaml, libconfig, rfc3339",
    project_urls={
        "Bug Reports": "https://github.com/cfgtree-dev/cfgtree/issues",
        "Source": "https://github.com/cfgtree-dev/cfgtree",
    },
)
