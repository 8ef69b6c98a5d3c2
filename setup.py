import pathlib

from setuptools import find_packages, setup

# Basic metadata
ROOT = pathlib.Path(__file__).parent
VERSION = "0.1.0"

INSTALL_REQUIRES = [
    "httpx>=0.27",
    "certifi",
    "pydantic>=2.5",
    "pydantic-settings>=2.1",
    "python-dotenv>=1.0",
    "typer>=0.12",
    "rich>=13.0",
]

TEST_REQUIRES = [
    "pytest>=8.0",
    "pytest-asyncio>=0.23",
]


setup(
    name="asana-hooks",
    version=VERSION,
    description="Asana REST client, dependent pick-list options and webhook verification",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=INSTALL_REQUIRES,
    extras_require={"test": TEST_REQUIRES},
    entry_points={
        "console_scripts": [
            "asana-hooks=asana_hooks.cli.main:app",
        ],
    },
    python_requires=">=3.10",
)
