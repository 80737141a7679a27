"""
Lets `python -m belated program.bel` work the same as the `belated` command.
"""
from .cmdline import main

main()
