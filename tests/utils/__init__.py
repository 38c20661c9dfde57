from .settings import make_settings
from .fakes import StaticVerifier, RecordingTransport, CountingWatchSource

__all__ = ["CountingWatchSource", "RecordingTransport", "StaticVerifier", "make_settings"]
