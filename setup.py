"""Setup configuration for the segment intersection engine."""
from setuptools import setup, find_packages

setup(
    name="sweepline",
    version="0.1.0",
    description="Line-segment intersection with brute-force and sweep-line strategies",
    author="Eric",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pygame>=2.5.0",
        "numpy>=1.20.0",
        "scipy>=1.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "sweepline=sweepline.__main__:main",
        ],
    },
)
