"""
Test configuration shared by every tokenlock test package
"""
import sys
from pathlib import Path

# Allow running the suite from a checkout without installing the package
src_path = Path(__file__).resolve().parent.parent / "src"
sys.path.insert(0, str(src_path))
