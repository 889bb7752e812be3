# setup.py
from setuptools import setup, find_packages

setup(
    name="font_scout",
    version="0.1.0",
    description="Asynchronous web font scanner matching rendered fonts against a foundry catalog",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"font_scout": ["data/*.txt", "templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["font_scout=font_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
