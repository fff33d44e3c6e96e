import setuptools
import re

with open('osufile/__init__.py', 'r') as f:
    version = re.search(r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]', f.read(), re.MULTILINE).group(1)

with open('README.md', 'r') as f:
    long_description = f.read()

setuptools.setup(
    name = 'osufile',
    author = 'osufile',
    version = version,
    packages = setuptools.find_packages(exclude=['tests', 'tests.*']),
    description = "A streaming decoder for osu!'s .osu beatmap file format.",
    long_description = long_description,
    long_description_content_type = 'text/markdown',
    license = 'MIT',
    install_requires = [
        'aiohttp',
        'orjson'
    ],
    extras_require = {
        'test': ['pytest']
    },
    python_requires = '>=3.9',
    package_data = {
        'osufile': ['py.typed'],
    },
    classifiers = [
        'Programming Language :: Python :: 3.9',
        'License :: OSI Approved :: MIT License',
    ]
)
