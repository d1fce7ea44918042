from setuptools import setup, find_packages

setup(
    name="proofforest",
    version="0.1.0",
    description="Branching proof exploration over a shared forest of proof states",
    author="ProofForest Contributors",
    author_email="",

    packages=find_packages(where="src"),
    package_dir={"": "src"},

    zip_safe=False,
    python_requires=">=3.8",

    install_requires=[
        "lark",
        "networkx",
        "pyyaml",
        "python-dotenv",
    ],

    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
        ],
        "test": [
            "pytest>=6.0",
        ],
    },

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
