"""
main.py — command-line entry point for development use.

For production, install with `pip install -e .` and run:
    meeting-csp --problem data/sample_week.json
or:
    python -m meeting_csp.cli --problem data/sample_week.json

sys.path manipulation here is a fallback so that running `python main.py`
works without a prior editable install.
"""
import sys
from pathlib import Path

_src = Path(__file__).parent / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from meeting_csp.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
