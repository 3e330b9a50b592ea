from machine_setup.cli import run

run()
