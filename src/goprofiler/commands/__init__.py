"""CLI subcommands, loaded lazily by goprofiler.cli."""
