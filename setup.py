import os

import setuptools

# Make sure that README.md decodes in environments that use the C locale
# (which implies ASCII), by explicitly giving the encoding.
with open(os.path.join(os.path.dirname(__file__), "README.md"), encoding="utf-8") as f:
    long_description = f.read()


setuptools.setup(
    name="pong",
    # MAJOR.MINOR.PATCH, per http://semver.org
    version="1.0.0",
    description="A rectangle bouncing around the terminal",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="terminal, animation, ansi, termios",
    license="ISC",
    py_modules=(
        "pong",
        "rawterm",
        "entity",
        "command",
        "vec2",
    ),
    entry_points={
        "console_scripts": ("pong = pong:_main",)
    },
    extras_require={
        "test": ("pytest",),
    },
    python_requires=">=3.6",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Topic :: Games/Entertainment",
        "Topic :: Terminals",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
    ],
)
