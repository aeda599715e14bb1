"""
Setup file.
"""

import os

from setuptools import find_packages, setup

URL = "https://github.com/zackees/stmgen"
KEYWORDS = "embedded stm32 embassy rust cargo project-generator probe-rs openocd firmware microcontroller"
HERE = os.path.dirname(os.path.abspath(__file__))



if __name__ == "__main__":
    setup(
        name="stmgen",
        version="0.1.0",
        description="Project generator for embassy-based STM32 firmware",
        maintainer="Zachary Vorhies",
        keywords=KEYWORDS,
        url=URL,
        python_requires=">=3.9",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=["jinja2>=3.0"],
        extras_require={"test": ["pytest>=7.0"]},
        entry_points={"console_scripts": ["stmgen=stmgen.cli:main"]},
        package_data={"stmgen": ["templates/*.j2"]},
        include_package_data=True)
