from setuptools import setup, find_packages

# Minimal setup.py for editable installs (pip install -e .)
setup(
    name="earlystop",
    version="0.1.0",
    description="Pluggable early-stopping criteria for iterative training",
    packages=find_packages(exclude=("tests", "experiments", "configs", "runs", "docs")),
    python_requires=">=3.10",
    install_requires=[
        "torch",
        "pyyaml",
        "matplotlib",
        "seaborn",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
