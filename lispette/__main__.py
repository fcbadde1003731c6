"""
Lets `python -m lispette program.lsp` work the same as the `lispette` command.
"""
from lispette.cmdline import main

main()
