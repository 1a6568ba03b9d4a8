from setuptools import find_packages, setup

setup(
    name="orderbook",
    version="0.1.0",
    packages=find_packages(exclude=["orderbook.tests"]),
    python_requires=">=3.9",
    install_requires=[
        "click",
        "python-dotenv",
        "SQLAlchemy>=2.0",
        "pandas",
        "pymongo",
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={
        "console_scripts": [
            "orderbook=orderbook.cli.main:cli",
        ],
    },
)
