from micrawl.cli import cli

cli(prog_name="micrawl")
