from setuptools import setup, find_packages

setup(
    name="lambdeploy",  # lambda deploy -> lambdeploy
    version="0.1.0",
    packages=find_packages(exclude=["src.tests"]),
    py_modules=["cli"],
    install_requires=[
        "boto3",
        "botocore",
    ],
    extras_require={
        "test": [
            "pytest",
            "moto[s3]>=5",
        ],
    },
    entry_points={
        'console_scripts': [
            'lambdeploy=cli:main',
        ],
    },
    author="ecaa",
    description="Upload a build artifact to S3 and update a Lambda function from it",
    python_requires='>=3.10',
)
