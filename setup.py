"""
Setup script for sandbox-playground
"""

from setuptools import setup, find_packages
import pathlib

# Read the README file
HERE = pathlib.Path(__file__).parent
README = (HERE / "README.md").read_text(encoding="utf-8")

setup(
    name="sandbox-playground",
    version="0.1.0",
    description="Multi-language run-code service with item store and GitHub push",
    long_description=README,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    package_data={"playground": ["infrastructure/*/js/*.js"]},
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.115.12",
        "httpx>=0.27.0",
        "pydantic>=2.11.5",
        "pydantic-settings>=2.12.0",
        "structlog>=24.1.0",
        "uvicorn>=0.34.3",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "playground-server=playground.interfaces.rest.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License",
    ],
    keywords="sandbox code-execution judge0 pyodide typescript",
)
