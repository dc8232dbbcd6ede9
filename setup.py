from setuptools import setup, find_packages

# Load the version info.
#
# Note that we cannot simply import the module, since dependencies listed
# in setup() will very likely not be installed yet when setup.py run.
#
# See:
#   https://packaging.python.org/guides/single-sourcing-package-version

__version__ = None

with open("opensearchgeo/_version.py") as fp:
    exec(fp.read())

version = __version__

tests_require = [
    "pytest",
    "requests-mock>=1.8.0",
]

setup(
    name="opensearch-geo-ets",
    version=version,
    description="OpenSearch URL template resolution and bounding box checks for catalogue conformance testing",
    python_requires=">=3.9",
    packages=find_packages(exclude=("tests", "tests.*")),
    include_package_data=True,
    tests_require=tests_require,
    install_requires=[
        "lxml>=4.6",
        "pyproj>=3.1",
        "shapely>=1.8.5",
        "attrs>=22.1.0",
        "requests>=2.26.0,<3.0",
        "urllib3>=1.26.20",
        "python-json-logger~=2.0",  # Avoid breaking change in 3.1.0 https://github.com/nhairs/python-json-logger/issues/29
    ],
    extras_require={
        "dev": tests_require,
    },
    entry_points={
        "console_scripts": [
            "opensearchgeo = opensearchgeo.cli:main",
        ]
    },
)
