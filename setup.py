"""Setup script for the disposables package."""

from setuptools import setup, find_packages

requires = [
    "anyio>=3.0.0",
    "colorama>=0.4.3",
    "outcome>=1.0.1",
    "sniffio>=1.2.0",
]

extras_require = {"test": ["pytest>=6.0", "trio>=0.20.0"]}

__version__ = None
exec(open("src/disposables/version.py").read())

setup(
    name="disposables",
    version=__version__,
    description="Dispose objects, collections, factories and awaitables of "
    "objects, synchronously or asynchronously",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["test"]),
    python_requires=">=3.8",
    include_package_data=True,
    install_requires=requires,
    extras_require=extras_require,
    test_suite="test",
)
