"""Setup configuration for MolDesc package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
readme_file = this_directory / "README.md"
long_description = readme_file.read_text(encoding='utf-8') if readme_file.exists() else ""

# Read version from __init__.py
def get_version():
    """Get version from __init__.py file."""
    version_file = this_directory / "moldesc" / "__init__.py"
    if version_file.exists():
        with open(version_file, 'r') as f:
            for line in f:
                if line.startswith('__version__'):
                    return line.split('=')[1].strip().strip('"\'')
    return "0.1.0"

# Core dependencies
core_requirements = [
    "numpy>=1.19.0",
    "pandas>=1.3.0",
    "rdkit>=2022.03.1",
    "PyYAML>=5.4",
]

# Optional dependencies for different features
optional_requirements = {
    "dev": [
        "pytest>=6.0.0",
        "pytest-cov>=2.12.0",
        "black>=21.0.0",
        "flake8>=3.9.0",
        "mypy>=0.910",
    ]
}

setup(
    name="moldesc",
    version=get_version(),
    author="MolDesc Development Team",
    author_email="moldesc@example.com",
    description="Molecular descriptors for tables of molecules",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Chemistry",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=core_requirements,
    extras_require=optional_requirements,
    entry_points={
        "console_scripts": [
            "moldesc=moldesc.cli:main",
        ],
    },
    keywords=[
        "cheminformatics",
        "molecular descriptors",
        "hydrogen bond acceptors",
        "WHIM",
    ],
    zip_safe=False,
)
