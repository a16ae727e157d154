from setuptools import setup, find_packages

setup(
    name="nlb-proxy-protocol-controller",
    version="0.1.0",
    packages=find_packages(),
    install_requires=[
        "kopf",
        "kubernetes>=18.20.0",
        "boto3",
        "flask",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "nlb-proxy-controller=nlb_proxy_controller.controller:main",
        ],
    },
    python_requires=">=3.9",
)
