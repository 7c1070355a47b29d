"""Application interfaces (ports).

Define contracts for infrastructure implementations (DIP).
No runtime imports from file_uploader.infrastructure.
"""

from file_uploader.application.interfaces.storage import IStorageBackend

__all__ = ["IStorageBackend"]
