"""
setup.py for kiosk-locale.

Usage:
    pip install -e .
    pip install -e .[test]
"""
from setuptools import find_packages, setup

about = {}
with open("kiosk_locale/__version__.py") as f:
    exec(f.read(), about)

setup(
    name="kiosk-locale",
    version=about["__version__"],
    description="Run-time string localization with CSV locale tables and reactive strings",
    packages=find_packages(include=["kiosk_locale", "kiosk_locale.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "requests>=2.28",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "kiosk-locale=kiosk_locale.__main__:main",
        ],
    },
)
