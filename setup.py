"""Package setup for fritz_cli."""

from setuptools import setup, find_packages

setup(
    name="fritz-cli",
    version="0.1.0",
    description="Console client for the AVM FRITZ!Box web API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "lxml>=5.0.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fritz-cli=fritz_cli.cli:main",
            "fritz-mock-server=fritz_cli.mock_server:main",
        ],
    },
)
