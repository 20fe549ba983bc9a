import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="rangeseries",
    version="1.0.0",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Lossless conversion between range series files and text",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=['tests']),
    scripts=[
        'scripts/rsdump.py',
        'scripts/rsgen.py',
    ],
    install_requires=[
        'bitstring>=4,<6',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
