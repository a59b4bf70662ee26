"""Configure pytest: make the src layout importable without installation."""

import sys
from pathlib import Path

root_dir = Path(__file__).parent

src_path = str(root_dir / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)
