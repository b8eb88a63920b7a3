[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "practicum"
version = "0.1.0"
description = "Small command-line tools, a days-left HTTP service, a reading-list Telegram bot and building blocks for comment, news and URL-shortener services"
requires-python = ">=3.10"
keywords = ["http", "flask", "rss", "url-shortener", "comments", "telegram", "calculator", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "pyyaml",
    "requests",
    "tabulate",
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
practicum-daysleft = "practicum.daysleft:main"
practicum-advisor = "practicum.advisor_bot:main"
practicum-moex = "practicum.moex:main"
practicum-calculator = "practicum.calculator:main"
practicum-disk-usage = "practicum.disk_usage:main"

[tool.hatch.build.targets.wheel]
packages = ["practicum"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
