from setuptools import setup, find_packages

setup(
    name="rawproto",
    version="0.1.0",
    description="Schema-less Protobuf wire format decoder",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    entry_points={"console_scripts": ["rawproto=rawproto.__main__:main"]},
    packages=find_packages(exclude=["tests", "*.tests", "*.tests.*"]),
    python_requires=">=3.7",
    install_requires=["click", "stringcase"],
    extras_require={"test": ["pytest", "protobuf"]},
    zip_safe=False,
)
