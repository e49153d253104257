#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="magento-mapper",
    version="1.0.0",
    description="Declarative mapping of ERP product records to Magento product payloads",
    long_description="""
magento-mapper turns arbitrary source records into Magento REST product payloads
from a declarative mapping configuration.
Features include:
- Field references and sync/async resolver functions per destination field
- Concurrent resolution of every field with asyncio
- Dotted destination paths for core and extension attributes
- Ordered custom_attributes list with absent values left out
- JSON mapping files validated with jsonschema
    """.strip(),
    packages=find_packages(include=["magento_mapper", "magento_mapper.*"]),
    package_data={"magento_mapper": ["schema/*.json"]},
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "jsonschema>=4.0",
    ],
    extras_require={"test": ["pytest", "pytest-asyncio"]},
    entry_points={"console_scripts": ["magento-mapper=magento_mapper.cli:main"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
