from setuptools import setup, find_packages

setup(
    name="mhgibbs",
    version="0.1.0",
    description="Adaptive Metropolis-within-Gibbs MCMC for user-defined models",
    packages=find_packages(include=["mhgibbs", "mhgibbs.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
