from setuptools import find_packages, setup

setup(
    name="skincare-tracker",
    version="0.1.0",
    packages=find_packages(include=["skincare_tracker", "skincare_tracker.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click>=8.0",
        "python-dotenv",
        "SQLAlchemy>=1.4",
        "pandas"
    ],
    extras_require={"dev": ["pytest"], "test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "skincare-tracker=skincare_tracker.cli.main:cli",
        ]
    },
)
