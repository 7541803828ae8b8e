from setuptools import setup, find_packages

setup(
    name="reisimports",
    version="1.0.0",
    packages=find_packages(include=["reisimports", "reisimports.*"]),
    install_requires=[
        "django>=4.2",
        "djangorestframework",
        "drf-spectacular",
        "djangorestframework-simplejwt",
        "psycopg2-binary",
        "python-decouple",
        "reportlab",
        "Pillow",
    ],
    extras_require={
        "tests": [
            "pytest",
            "pytest-django",
        ],
    },
    python_requires=">=3.11",
)
