"""
Palette Finder Run ID Utilities
Generate identifiers that tie together the log lines of one image pass.
"""
import uuid
from datetime import datetime


def generate_run_id() -> str:
    """
    Generate a unique id for one image pass.

    Returns:
        Run id string such as ``pal-20240522101500-1a2b3c4d``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"pal-{timestamp}-{short_uuid}"

