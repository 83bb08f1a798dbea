# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="context4ai",
    version="1.0.0",
    description="Assemble a project tree and file contents into a token-bounded LLM context",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["context4ai", "context4ai.*"]),
    python_requires=">=3.9",
    install_requires=[
        "wcmatch>=8.4",
        "tiktoken>=0.5",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'context4ai=context4ai.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
