"""Setup script for the Dani.ai photo editor."""

from setuptools import setup, find_packages
import os

# Read the contents of your README file
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

# Get the version from the package
with open(os.path.join("dani_ai", "__init__.py"), "r") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split('"')[1]
            break

setup(
    name="dani-ai",
    version=version,
    author="Dani.ai Team",
    author_email="example@example.com",
    description="Photo editor that restores, restyles and retouches photos with a hosted AI image model",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/username/dani-ai",
    packages=find_packages(include=['dani_ai', 'dani_ai.*']),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.19.0",
        "opencv-python>=4.5.0",
        "Pillow>=8.0.0",
        "google-genai>=1.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "web": ["streamlit>=1.50.0"],
        "test": ["pytest>=7.0", "streamlit>=1.50.0"],
    },
    entry_points={
        "console_scripts": [
            "dani-ai=dani_ai.cli:run_cli",
            "dani-ai-web=dani_ai.web:run_web_app",
        ],
    },
)
