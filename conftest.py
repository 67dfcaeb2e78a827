import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

# Unit tests should not depend on a developer's local `.env`.
os.environ.setdefault("MERGE_REQUIRE_MONO", "false")
os.environ.setdefault("COPY_CHUNK_SIZE", "65536")
