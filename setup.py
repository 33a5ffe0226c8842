"""
Setup file.
"""

import os

from setuptools import setup

URL = "https://github.com/zackees/pioresolve"
KEYWORDS = "embedded platformio board mcu framework target-triple resolver catalog"
HERE = os.path.dirname(os.path.abspath(__file__))



if __name__ == "__main__":
    setup(
        maintainer="Zachary Vorhies",
        keywords=KEYWORDS,
        url=URL,
        include_package_data=True)
