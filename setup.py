from setuptools import setup, find_packages

setup(
    name="data-examiner",
    version="1.0.0",
    packages=find_packages(exclude=['tests', 'tests.*', 'scripts', 'cache', '.pytest_cache']),
    install_requires=[
        "langchain-core>=0.3.0,<0.4.0",
        "langchain-openai>=0.2.0",
        "openai>=1.0.0",
        "python-dotenv>=1.0.0",
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "slowapi>=0.1.8",
        "python-multipart>=0.0.6",
        "pydantic>=2.0.0",
        "pandas>=2.0.0",
        "numpy>=1.24.0",
        "openpyxl>=3.1.0",
        "xlrd>=2.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.25.0",
        ],
    },
    python_requires=">=3.11",
)
