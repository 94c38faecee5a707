# setup.py
from setuptools import setup, find_packages

setup(
    name="owa-coverage",
    version="0.1.0",
    description="Open-world coverage bounds for three-valued scenario tag vectors",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.23",
        "scipy>=1.9",        # scipy.optimize.milp (HiGHS)
        "pulp>=2.7",
        "networkx>=3.0",
        "pandas>=2.0",
        "rich>=13.0",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
