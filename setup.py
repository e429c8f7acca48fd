from setuptools import find_packages, setup

name = "contrail_anon"
version = "0.3.0"
install_requires = [
    "aioprocessing",
    "concurrent-log-handler",
    "PyYAML",
]
tests_require = [
    "pytest",
]


if __name__ == "__main__":
    setup(
        name=name,
        version=version,
        description="Contrail database dump anonymization tool",
        classifiers=[
            "Intended Audience :: Developers",
            "Intended Audience :: System Administrators",
            "Programming Language :: Python",
            "Programming Language :: Python :: 3",
            "Topic :: Database",
        ],
        license="MIT",
        keywords="contrail cassandra anonymization tool",
        python_requires=">=3.8",
        packages=find_packages(exclude=["test*"]),
        install_requires=install_requires,
        extras_require={"test": tests_require},
        entry_points={
            "console_scripts": [
                "contrail-anon = contrail_anon.cli:main",
            ],
        },
    )
