"""pugview subcommands (one module per command)."""
