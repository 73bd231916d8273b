from gitpkg.cli import run

run()
