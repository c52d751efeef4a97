"""
Setup script для модуля chinese_tokenizer
"""

from setuptools import setup, find_packages
from pathlib import Path

# Читаем README для описания
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="chinese_tokenizer",
    version="0.1.0",
    author="Sergey",
    description="Безопасная обёртка над нативным движком сегментации китайского текста jieba",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Text Processing :: Linguistic",
    ],
    python_requires=">=3.8",
    install_requires=[
        "PyYAML>=6.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "black>=22.0",
            "flake8>=4.0",
        ],
    },
    # Нативная библиотека libjieba и словари не входят в пакет:
    # путь задаётся в chinese_tokenizer.yaml (engine.library_path, dictionary.dir)
    include_package_data=True,
    zip_safe=False,
)
