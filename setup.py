from setuptools import setup, find_packages

setup(
    name='proxyctl',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    package_data={
        'proxyctl': ['tests/fixtures/*.json'],
    },
    install_requires=[
        'typer[all]',
        'kubernetes',
        'python-dotenv',
        'PyYAML',
        'tabulate',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'proxyctl=proxyctl.cli:app'
        ]
    },
    author='Your Name',
    description='A CLI for inspecting the Envoy sidecar proxy configuration of Kubernetes pods',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
