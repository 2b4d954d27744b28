[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coursetools"
version = "0.1.0"
description = "Tools for structuring, scheduling and checking slide-based training courses written as Markdown books"
requires-python = ">=3.10"
keywords = ["markdown", "book", "course", "slides", "preprocessor", "schedule", "webdriver"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Education",
]
dependencies = [
    "pyyaml>=6.0",
    "markdown-it-py>=3.0",
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
mdbook-course = "coursetools.preprocessor:main"
course-content = "coursetools.content:main"
course-schedule = "coursetools.schedule:main"
mdbook-exerciser = "coursetools.exerciser:main"
mdbook-slide-evaluator = "coursetools.slide_evaluator_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["coursetools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
