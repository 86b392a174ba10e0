"""
Allows `python -m dena`, which takes exactly the same arguments as the `dena` command.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dena.cmdline import main

main()
