import os

from mypyc.build import mypycify
from setuptools import setup

# Compiling needs a C toolchain, so it is opt-in:
#   GAUSSINT_USE_MYPYC=1 pip install .
#
# The compiled extension modules sit next to the .py sources in the wheel; the import system
#   prefers extension modules, so the compiled versions win when both are present.
ext_modules = []
if os.environ.get("GAUSSINT_USE_MYPYC") == "1":
    ext_modules = mypycify([
        "gaussint/__init__.py",
        "gaussint/gauss.py",
    ])

setup(
    packages=["gaussint"],
    include_package_data=True,
    package_data={"gaussint": ["py.typed"]},
    ext_modules=ext_modules,
)
