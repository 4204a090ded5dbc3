from setuptools import find_packages, setup

setup(
    name="tpcgeo",
    version="0.1",
    packages=find_packages(exclude=["test", "test.*"]),
    include_package_data=True,
    install_requires=[
        "uncertainties",
        "numpy>=1.6",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
