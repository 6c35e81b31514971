#!/usr/bin/env python3
"""
Setup script for elvcar (single-car elevator controller simulation)
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="elvcar",
    version="0.2.0",
    author="CahootsJP",
    description="Single-car elevator controller simulation: trapezoidal kinematics, door sequencing and request gating",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/CahootsJP/elvsim-simple",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples"]),
    py_modules=["main", "run_with_visualization"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Physics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=[
        "simpy>=4.0.0",
        "numpy>=1.20.0",
        "matplotlib>=3.3.0",
        "sympy>=1.9",
        "pyyaml>=5.4",
        "flask>=2.0.0",
        "flask-cors>=3.0.0",
        "websockets>=10.1",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "elvcar-run=main:main",
            "elvcar-viz=run_with_visualization:main",
        ],
    },
    include_package_data=True,
    package_data={
        "config": ["scenarios/*.yaml"],
    },
)
