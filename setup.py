"""Packaging for twinpane."""

from setuptools import setup, find_packages
import os
import re

HERE = os.path.dirname(__file__)


def read_requirements(filename="requirements.txt"):
    """Return the non-comment lines of a requirements file next to setup.py."""
    with open(os.path.join(HERE, filename), "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


def read_version():
    # twinpane/cli.py holds the only __version__
    with open(os.path.join(HERE, "twinpane", "cli.py"), "r", encoding="utf-8") as f:
        match = re.search(r'^__version__\s*=\s*["\']([^"\']+)["\']', f.read(), re.MULTILINE)
    if not match:
        raise RuntimeError("No __version__ in twinpane/cli.py")
    return match.group(1)


setup(
    name="twinpane",
    version=read_version(),
    description="Folder tree and file listing kept in step, with clipboard copy/move and recursive delete",
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={"test": read_requirements("requirements-dev.txt")},
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={"console_scripts": ["twinpane=twinpane.cli:app"]},
    classifiers=[
        "Environment :: Console",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Filesystems",
    ],
)
