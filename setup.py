"""Setup configuration for qualtiva-e2e package."""

from setuptools import setup, find_packages

setup(
    name="qualtiva-e2e",
    version="0.1.0",
    description="Playwright end-to-end suite for the Qualtiva Solutions website",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "rich>=13.0.0",
        "httpx>=0.25.0",
        "playwright>=1.40.0",
        "pytest>=7.4.0",
        "pytest-playwright>=0.4.3",
        "pytest-base-url>=2.0.0",
        "pytest-xdist>=3.3.0",
        "pytest-rerunfailures>=12.0",
        "pytest-json-report>=1.5.0",
    ],
    extras_require={
        "dev": [
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qualtiva-e2e=qualtiva_e2e.cli.app:main",
        ],
    },
)
