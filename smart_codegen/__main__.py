"""Allow ``python -m smart_codegen``."""

from smart_codegen.cli import main

main()
