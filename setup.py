"""
Setup script for CyborgDB Python client
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="cyborgdb",
    version="0.9.0",
    author="CyborgDB Team",
    author_email="support@cyborgdb.io",
    description="Python REST client for CyborgDB: The Confidential Vector Database",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/cyborgdb/cyborgdb-py",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Database",
        "Topic :: Security",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "pydantic>=2.0.0",
        "requests>=2.28.0",
        "urllib3>=1.26.0",
    ],
    extras_require={
        "langchain": [
            "langchain-core>=0.3.0",
            "sentence-transformers>=2.2.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "python-dotenv>=1.0.0",
            "langchain-core>=0.3.0",
        ],
    },
)
