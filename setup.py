# setup.py

from setuptools import setup, find_packages

setup(
    name="vm-cluster-sizer",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'size-cluster=cluster_sizer.cli:main',
        ],
    },
    author="Your Name",
    author_email="your.email@example.com",
    description="Node count planning for VM migrations to container-native virtualization",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="virtualization capacity-planning kubernetes storage",
    python_requires=">=3.8",
)
