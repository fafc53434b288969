# setup.py
from setuptools import setup, find_packages

setup(
    name="micrawl",
    version="0.2.0",
    description="Асинхронный краулер Micrawl: обход сайта и сбор ссылок",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"micrawl": ["report/templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.10",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "yarl>=1.18",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["micrawl=micrawl.cli:cli"],
    },
    python_requires=">=3.11",
)
