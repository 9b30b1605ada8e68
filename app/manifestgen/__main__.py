"""Allow running manifestgen with ``python -m manifestgen``."""

from manifestgen.cli.main import app

app()
