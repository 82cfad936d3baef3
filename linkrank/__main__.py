from linkrank.cli import run

run()
