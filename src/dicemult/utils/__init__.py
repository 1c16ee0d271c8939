from dicemult.utils.logging import setup_logging
from dicemult.utils.notes import extract_metadata

__all__ = ["setup_logging", "extract_metadata"]
