"""
Lets you say `python -m moth run program.moth` and so forth.
See `moth.cmdline` for the details.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from moth.cmdline import main

main()
