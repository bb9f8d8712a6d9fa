from setuptools import setup, find_packages

setup(
    name="formstate",
    version="0.1.0",
    description="Reactive, schema-driven form state for administrative front ends",
    author="Metafor Team",
    packages=find_packages(include=["formstate", "formstate.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
