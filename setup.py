# setup.py
from setuptools import setup, find_packages

setup(
    name="blockinsight",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"blockinsight.config": ["pools.json"]},
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.100",
        "uvicorn>=0.15.0",
        "pydantic>=2.0",
        "aiohttp>=3.8",
        "tenacity>=8.0",
        "PyYAML>=6.0",
        "prometheus-client>=0.16",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "pytest-cov>=4.1",
            "pytest-mock>=3.10",
            "httpx>=0.24",
            "black>=23.0",
            "isort>=5.12",
            "flake8>=6.0",
            "mypy>=1.0"
        ],
    },
    entry_points={
        "console_scripts": [
            "blockinsight=blockinsight.cli.cli:main",
        ],
    },
    author="Your Name",
    author_email="your.email@example.com",
    description="Block explorer core: cached block detail, summaries and daily listings over a node RPC",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/blockinsight",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
