from setuptools import setup, find_packages

setup(
    name="kira-mnemonics",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        # Mnemonics, HD derivation and bech32 addresses
        "bip_utils>=2.9.3",
        # ed25519 validator and node keys
        "PyNaCl>=1.5.0",
        # Data validation and configuration
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        # CLI and UI
        "click>=8.1.3",
        "rich>=13.0.0",
        # Logging
        "coloredlogs>=15.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "kmcli=kira_mnemonics.cli.main:main",
        ],
    },
    author="KIRA",
    description="Deterministic validator key sets derived from a single master mnemonic",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
