from setuptools import find_packages, setup

setup(
    name="quikbar",
    version="0.1.0",
    description="Low-overhead terminal progress bar with blended ETA",
    packages=find_packages(include=["quikbar", "quikbar.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "tracerite",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["quikbar=quikbar.cli:main"]},
)
