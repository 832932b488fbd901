from setuptools import setup, find_packages

setup(
    name="filebucket",
    version="0.1.0",
    description="Content addressed file bucket",
    author="Filebucket Team",
    packages=find_packages("python"),
    package_dir={"": "python"},
    python_requires=">=3.8",
    install_requires=[
        "cryptography>=37.0.0",  # Digest implementations
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        'console_scripts': [
            'filebucket=filebucket_core.__main__:main',
        ],
    },
)
