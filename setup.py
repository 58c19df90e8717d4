import re
from os.path import abspath, dirname, join
from setuptools import find_packages, setup


def _get_version():
    # The version is defined in the top-level package
    init_path = join(dirname(abspath(__file__)), "src", "flatseq", "__init__.py")
    with open(init_path) as file:
        content = file.read()
    match = re.search(r'^__version__\s*=\s*"([^"]+)"', content, re.MULTILINE)
    if match is None:
        raise RuntimeError("Unable to find the version string")
    return match.group(1)


def _get_long_description():
    readme_path = join(dirname(abspath(__file__)), "README.rst")
    with open(readme_path) as file:
        return file.read()


setup(
    name="flatseq",
    version=_get_version(),
    description=(
        "Parsing of GenBank flat files into annotated sequences, "
        "with GFF3 and JSON conversion"
    ),
    long_description=_get_long_description(),
    long_description_content_type="text/x-rst",
    author="The flatseq contributors",
    license="BSD-3-Clause",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={"test": ["pytest"]},
    zip_safe=False,
)
