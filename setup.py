# setup.py
from setuptools import setup, find_packages

setup(
    name="reel",
    version="0.1.0",
    description="Expression runtime dispatching into a pluggable tape machine",
    packages=find_packages(include=["reel", "reel.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["reel = reel.__main__:main"],
    },
    zip_safe=False,
)
