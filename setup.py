import os
import re

from setuptools import find_packages, setup

with open(os.path.join("src", "picoslip10", "__about__.py")) as f:
    version = re.search(r'^__version__ = "([^"]+)"$', f.read(), re.M).group(1)

if __name__ == "__main__":
    setup(
        name="picoslip10",
        version=version,
        description="SLIP-0010 Ed25519 hierarchical key derivation",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.10",
        extras_require={"test": ["pytest"]},
    )
