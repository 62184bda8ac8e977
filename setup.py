"""Setup script for the log migration write stage."""
from setuptools import setup, find_packages

setup(
    name="logmigration",
    version="0.1.0",
    packages=find_packages(include=["logmigration", "logmigration.*"]),
    py_modules=["cli"],
    install_requires=[
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "pydantic>=2",
        "python-dotenv",
        "boto3",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["logmigration=cli:main"],
    },
    python_requires=">=3.10",
)
