from setuptools import setup, find_packages

setup(
    name="ring-election",
    version="0.1.0",
    description="Synchronous simulation of Hirschberg-Sinclair leader election on a bidirectional ring",
    author="adamfilli",
    packages=find_packages(include=["ringelection", "ringelection.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "dev": [
            "pytest",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
