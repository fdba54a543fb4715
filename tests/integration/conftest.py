"""
Pytest configuration and shared fixtures for PageFeed integration tests.
"""

import sys
from pathlib import Path

# Add tests/integration to path for fixtures imports
sys.path.insert(0, str(Path(__file__).parent))
