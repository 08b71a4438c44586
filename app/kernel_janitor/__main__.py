"""Allow running kernel-janitor as ``python -m kernel_janitor``."""

from kernel_janitor.cli.main import app

app()
