from setuptools import setup, find_packages

setup(
    name="validator-cli",
    version="0.3.0",
    description="Validator identifier resolution and wallet import input handling for consensus clients",
    author="Your Name",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "structlog>=23.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "validator-cli=validator_cli.main:main",
        ],
    },
)
