from setuptools import setup, find_packages

setup(
    name="seismic_feed",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.20.0",
        "lxml",
    ],
    extras_require={
        "dev": [
            "pytest",
        ]
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            'seismic-feed=seismic_feed.scripts.cli:main',
        ],
    },
)
