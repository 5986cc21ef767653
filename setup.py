from setuptools import find_packages, setup

setup(
    name="treecli",
    version="0.1.0",
    description="Hierarchical command trees with typed options resolved from "
    "arguments, environment variables and defaults.",
    long_description=open("README.md", encoding="UTF-8").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(include=["treecli", "treecli.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "rich>=13.0",
        "python-json-logger>=3.1",
        "PyYAML>=6.0",
        "toml>=0.10",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "treecli=treecli.__main__:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
