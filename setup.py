from setuptools import setup, find_packages

setup(
    name="cellarbook",
    version="0.1.0",
    description="Cellarbook - a personal wine cellar, tasting journal and friends' cellars on Supabase.",
    author="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "pandas>=2.0.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "streamlit>=1.30.0",
        "streamlit-authenticator>=0.3.0",
        "supabase>=2.0.0",
        "plotly>=5.15.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
)
