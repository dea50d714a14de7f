from setuptools import setup

setup(
    name="virtinv",
    version="0.1.0",
    packages=["virtinv.cli", "virtinv.lib"],
    install_requires=[
        "Click>=8.2",
        "PyYAML",
        "lxml",
        "colorama",
        "libvirt-python",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "virtinv = virtinv.cli.cli:cli",
        ],
    },
)
