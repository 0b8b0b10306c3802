from setuptools import setup, find_packages

setup(
    name="production-accounting",
    version="0.1.0",
    packages=find_packages(include=["production_accounting", "production_accounting.*"]),
    install_requires=[
        "pydantic",
        "pydantic-settings",
        "duckdb",
        "polars",
        "python-dotenv"
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio"
        ]
    },
    python_requires=">=3.9",
)
