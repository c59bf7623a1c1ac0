"""Setup of the Doris package

Install with

    pip install -e .[test]

"""

# Standard library imports
from os import path

# Third party imports
from setuptools import setup, find_packages

# Name, version and description are read from the doris package itself, which has no third party imports
import doris

here = path.abspath(path.dirname(__file__))

with open(path.join(here, "README.md"), encoding="utf-8") as fid:
    long_description = fid.read()

setup(
    name=doris.__name__,
    version=doris.__version__,
    description=doris.__doc__.strip().split("\n\n")[0].replace("\n", " "),
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Norwegian Mapping Authority",
    author_email=doris.__contact__,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Astronomy",
    ],
    keywords="doris rinex geodesy satellite tracking",
    packages=["doris"] + ["doris." + p for p in find_packages(where="doris")],
    # Default configuration, found by doris.lib.config in the config directory of the installation
    data_files=[("config", ["config/doris.conf"])],
    python_requires=">=3.7",
    install_requires=["midgard>=1.2.0", "numpy", "pandas"],
    extras_require={
        "optional": [],
        "test": ["pytest"],
        "dev_tools": ["black", "bumpversion", "flake8", "mypy", "pytest"],
    },
)
