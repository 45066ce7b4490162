from setuptools import setup, find_packages
import os

# Get the version from the VERSION file.
version_file = os.path.join(os.path.dirname(__file__), "VERSION")
with open(version_file) as f:
    version = f.read().strip()


extras_require = {
    "test": ["pytest"],
}

setup(
    name="cloudfront-invalidation-scheduler",
    version=version,
    description="Scheduled CloudFront cache invalidation",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"cfscheduler": ["py.typed"]},
    python_requires=">=3.10",
    install_requires=(
        "boto3",
        "botocore",
        "e3-core",
    ),
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "cfscheduler-invalidate = cfscheduler.main:main",
        ],
    },
)
