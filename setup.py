from setuptools import setup, find_packages

setup(
    name="canfuzz",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "scripts"]),
    install_requires=[
        "pandas>=2.1.0",
        "numpy>=1.26.0",
        "pydantic-settings>=2.0.0",
        "tqdm>=4.66.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
)
