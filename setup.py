from setuptools import setup, find_packages

setup(
    name="polyreg",
    version="1.0",
    description="polyreg: polynomial least squares by the normal equation",
    author="marcu",
    packages=find_packages(exclude=["tests", "scripts"]),
    install_requires=["numpy", "polars", "tqdm"],
)
