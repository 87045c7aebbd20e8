import shutil

import nox
from nox import session as nox_session
from nox.project import load_toml
from nox.sessions import Session

MANIFEST_FILENAME = "pyproject.toml"
PROJECT_MANIFEST = load_toml(MANIFEST_FILENAME)
PROJECT_NAME: str = PROJECT_MANIFEST["project"]["name"]

TEST_DIR = "tests"
BUILD_DIR = "build"
DIST_DIR = "dist"


def install_group_dependencies(session: Session, dependency_group: str):
    dependencies = nox.project.dependency_groups(PROJECT_MANIFEST, dependency_group)
    session.install(*dependencies)
    session.log(f"Installed dependencies: {dependencies} for {dependency_group}")


# `nox -s test` runs the whole suite, `nox -s test -- tests/test_preflight.py -s -vv`
# runs a single file
@nox_session(reuse_venv=True)
def test(session: Session):
    install_group_dependencies(session, "dev")
    session.install("-e", ".")
    posargs = session.posargs or [TEST_DIR, "-s", "-vv", "-n", "auto", "--dist", "worksteal"]
    session.run("python", "-m", "pytest", *posargs)


@nox_session(reuse_venv=True)
def build(session: Session):
    install_group_dependencies(session, "build")
    session.run("python", "-m", "build", "--outdir", DIST_DIR)


@nox_session(python=False)
def clean(session: Session):
    for path in (BUILD_DIR, DIST_DIR, f"src/{PROJECT_NAME.replace('-', '_')}.egg-info"):
        shutil.rmtree(path, ignore_errors=True)
        session.log(f"Removed: {path}")
