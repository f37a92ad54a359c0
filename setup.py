#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PageFlow - Setup Configuration
HTML → paginated DOCX (high-fidelity) and PDF (print) conversion.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip()
        for line in requirements_path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]

test_requirements = [
    "pytest>=7.4.0",
    "pytest-cov>=4.1.0",
    "pytest-asyncio>=0.21.0",
    "httpx>=0.26.0",  # FastAPI TestClient
]

setup(
    name="pageflow-converter",
    version="1.0.0",
    description="Convert HTML to paginated Word and PDF documents via a headless browser",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PageFlow Team",
    python_requires=">=3.9",
    packages=find_packages(include=["config", "pageflow", "api"]),
    install_requires=requirements,
    extras_require={
        "test": test_requirements,

        # Development dependencies
        "dev": test_requirements + [
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pageflow=pageflow.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Markup :: HTML",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="html docx pdf playwright conversion pagination",
)
