"""
Setup for MD&A Sentiment vs Financial Performance.

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
"""
from setuptools import setup, find_packages

setup(
    name="mdna-sentiment",
    version="1.0.0",
    author="Jose Orlando Bobadilla Fuentes",
    description=(
        "Loughran-McDonald lexicon scoring of annual MD&A disclosures, "
        "joined with yearly financial performance metrics."
    ),
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "scipy>=1.11.0",
        "yfinance>=0.2.28",
        "matplotlib>=3.7.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": ["mdna-sentiment = main:main"]
    },
    keywords=[
        "sentiment-analysis", "loughran-mcdonald", "10-k", "nlp",
        "quantitative-finance", "textual-analysis",
    ],
)
