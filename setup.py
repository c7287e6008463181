from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="storeroute",
    version="0.1.0",
    author="storeroute contributors",
    description="Shortest shopping routes through grid store floor plans.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"storeroute.schemas": ["*.json"]},
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "networkx",
        "PyYAML",
        "jsonschema",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["storeroute=storeroute.cli:main"]},
)
