# setup.py
from setuptools import setup, find_packages

setup(
    name="get-linked-data",
    version="0.1.0",
    description="Crawl a list of URLs and scrape the JSON-LD embedded in each page",
    packages=find_packages(exclude=("tests", "tests.*")),  # находит get_linked_data и подпакеты
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "lxml>=5.0",
        "jq>=1.6",
        "tldextract>=5.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "get-linked-data=get_linked_data.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
