from goprofiler.cli import cli

cli()
