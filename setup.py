from setuptools import setup

setup(
    name            = "qnbt",
    version         = "1.0.0",
    description     = "NBT and SNBT codec for Python 3",
    packages        = [ "qnbt" ],
    python_requires = ">=3.7",
    zip_safe        = True,
    extras_require  = {
        "test": [ "hypothesis" ]
    }
)
