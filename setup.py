from setuptools import setup, find_packages

setup(
    name="schedule-tracker",
    version="0.1.0",
    description="Schedule Tracker - start/stop session tracking over SQLite",
    python_requires=">=3.10",
    packages=find_packages(include=["tracker", "tracker.*"]),
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "loguru>=0.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.25",
        ],
    },
    entry_points={
        "console_scripts": [
            "schedule-tracker=tracker.main:main",
        ],
    },
)
