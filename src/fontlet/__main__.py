"""Allow ``python -m fontlet``."""

from fontlet.cli.main import main

main()
