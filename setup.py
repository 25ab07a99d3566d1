# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="projectfilefinder",
    version="0.1.0",
    description="Map absolute paths reported by build tools back to project file resources",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["projectfilefinder*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'projectfilefinder=projectfilefinder.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
