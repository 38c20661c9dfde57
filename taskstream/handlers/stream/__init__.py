from .session import StreamSession
from .transport import QueueTransport
from .manager import handle_stream_request
from .debounce import DebouncedNotifier

__all__ = ["DebouncedNotifier", "QueueTransport", "StreamSession", "handle_stream_request"]
