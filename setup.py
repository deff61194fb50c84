from setuptools import setup, find_packages

setup(
    name="event_manager",
    version="0.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    package_data={"event_manager": ["templates/*.html", "templates/events/*.html"]},
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.6.0",
        "python-dotenv>=1.0.0",
        "jinja2>=3.1.2",
        "requests",
        "flask>=2.2.0",
        "flask-cors>=4.0.0",
        "pyyaml>=6.0",
        "marshmallow>=3.19.0",  # Para desserialização dos payloads da API
        "flask-limiter>=3.5.0",  # Para rate limiting das mutações
        "babel>=2.12",  # Para formatação de datas
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-cov",
            "beautifulsoup4",  # Para inspecionar o HTML renderizado
        ],
    },
    entry_points={
        "console_scripts": [
            "event-manager=event_manager.cli:app",
        ],
    },
)
