"""Allow ``python -m tdcalc``."""

from tdcalc.cli import main

main()
