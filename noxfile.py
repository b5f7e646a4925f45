import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]

# psycopg2-binary (the `postgresql` extra) ships a compiled .so per interpreter;
# reinstall it so poetry's cache cannot hand over one built for another Python.
_C_EXT_PACKAGES = ["psycopg2-binary"]


def _install(session: nox.Session) -> None:
    """Install storefront with the `test`, `postgresql` and `loadtest` extras."""
    session.run("poetry", "install", "--all-extras", external=True)
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_C_EXT_PACKAGES)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Domain, application, HTTP and behaviour tests on every supported Python."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Aggregate and identity-verifier tests only: no command handlers, no HTTP."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_api(session: nox.Session) -> None:
    """FastAPI endpoint tests through TestClient."""
    _install(session)
    session.run("pytest", "-m", "integration", *session.posargs)
