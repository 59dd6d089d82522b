from setuptools import setup, find_packages

setup(
    name="football-power-rankings",
    version="0.1.0",
    description="Weekly power rankings, game predictions and Game of the Week selection for a football league",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "football-power-rankings=src.main:main",
        ],
    },
)
