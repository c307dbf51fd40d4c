from pathlib import Path
from setuptools import setup

setup(
    name="clonediv",
    version="0.1.0",
    description="Permutation tests for differences in clonotype diversity between groups.",
    python_requires='>=3.8',
    install_requires=[
        l.strip() for l in
        Path(__file__).parent.joinpath('requirements.txt').read_text('utf-8').splitlines()
        if l.strip()
    ],
    extras_require={
        "dev": [
            "pytest",
        ]
    },
    packages=["clonediv"],
    zip_safe=False
)
