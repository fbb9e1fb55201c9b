[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blogkit"
version = "0.1.0"
description = "Building blocks for a small blog backend: categories on MongoDB, posts on PostgreSQL, batched loading, filters and an HTTP server shell."
requires-python = ">=3.11"
keywords = ["blog", "posts", "categories", "mongodb", "postgresql", "dataloader", "starlette"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "pymongo>=4.6",
    "sqlalchemy>=2.0",
    "python-slugify>=8.0",
    "python-dotenv>=1.0",
    "pyyaml>=6.0",
    "starlette>=0.37",
    "uvicorn>=0.29",
]

[project.optional-dependencies]
test = [
    "pytest>=8.0",
    "httpx>=0.27",
]

[tool.hatch.build.targets.wheel]
packages = ["blogkit"]

[tool.hatch.build.targets.sdist]
include = ["blogkit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
ignore_missing_imports = true
