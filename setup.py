# setup.py
from setuptools import setup, find_packages

LSP_REQUIRES = ["pygls>=1.1,<2", "lsprotocol>=2023.0.0"]

setup(
    name="callisp",
    version="0.3.0",
    description="A small Lisp interpreter with a REPL and a language server",
    packages=find_packages(include=["callisp", "callisp.*", "callisp_lsp", "callisp_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "lsp": LSP_REQUIRES,
        "test": ["pytest>=7", "hypothesis>=6"] + LSP_REQUIRES,
    },
    entry_points={
        "console_scripts": [
            "callisp=callisp.__main__:main",
            "callisp-ls=callisp_lsp.server:main",
            "callisp-repl-server=callisp_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
