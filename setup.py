from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="pdf_annotation",
    version=Path("./pdf_annotation/VERSION").read_text().strip(),
    packages=find_packages(include=["pdf_annotation", "pdf_annotation.*"]),
    package_data={"pdf_annotation": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "easydict",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
