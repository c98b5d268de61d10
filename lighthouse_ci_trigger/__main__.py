"""Allow running as ``python -m lighthouse_ci_trigger``."""

from lighthouse_ci_trigger.cli import main

main()
