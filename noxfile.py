import nox

SOURCES = [
    "packages/specifications/src",
    "packages/requests/src",
]
LOCATIONS = [
    *SOURCES,
    "packages/specifications/tests",
    "packages/requests/tests",
    "tests",
]
PYTHONS = ["3.10", "3.11", "3.12"]

nox.options.sessions = ["lint", "type_check", "tests"]


@nox.session(python=PYTHONS)
def tests(session: nox.Session) -> None:
    """Run unit and architecture tests."""
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHONS[-1])
def autoformat(session: nox.Session) -> None:
    """Fix linting issues and format code."""
    session.install("ruff")
    session.run("ruff", "check", "--fix", *LOCATIONS)
    session.run("ruff", "format", *LOCATIONS)


@nox.session(python=PYTHONS[-1])
def lint(session: nox.Session) -> None:
    """Run ruff linter and formatter checks."""
    session.install("ruff")
    session.run("ruff", "check", *LOCATIONS)
    session.run("ruff", "format", "--check", *LOCATIONS)


@nox.session(python=PYTHONS)
def type_check(session: nox.Session) -> None:
    """Run mypy over both packages."""
    session.install("-e", ".[dev]")
    session.run("mypy", *SOURCES)


@nox.session(python=PYTHONS[-1])
def arch_check(session: nox.Session) -> None:
    """Verify package boundaries using pytest-archon."""
    session.install("-e", ".[test]")
    session.run("pytest", "tests/architecture", *session.posargs)


@nox.session(python=PYTHONS[-1])
def dead_code(session: nox.Session) -> None:
    """Scan for unused code using vulture."""
    session.install("vulture")
    session.run("vulture", "--min-confidence", "80", *SOURCES)
