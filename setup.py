"""Setup configuration for Interactcord Discord Bot."""

from setuptools import setup, find_packages

setup(
    name="interactcord",
    version="0.0.1",
    description="A Discord bot template with discoverable commands, localized metadata and cooldowns",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"interactcord": ["resources/languages/**/*.yml"]},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "py-cord>=2.6",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "prompt_toolkit>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "interactcord=interactcord.main:main",
        ],
    },
)
