from setuptools import setup
from xlog import __version__

setup(
    name="xlog",
    long_description="xlog is a thread-safe call-site logging library writing leveled lines to the console "
    "and to size-rotated log files.",
    version=__version__,
    packages=[
        "xlog",
    ],
    include_package_data=True,
    install_requires=[
        "click>=8.0.3,<9.0.0",
        "pyyaml>=6.0.0,<7.0.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0.0",
        ],
    },
    entry_points="""
        [console_scripts]
        xlog-demo=xlog.cli:cli
    """,
)
